"""
Token tables for the WHILE language.

Token types are plain upper-case strings. The lexer consults
`symbol_tokens` for operators and punctuation and `keyword_tokens` for
reserved words; the parser only ever compares token types.

Exports:
    - symbol_tokens
    - keyword_tokens
    - token_hashmap
    - EOF, UNKNOWN, NUMBER, IDENT and the remaining token type names
"""

ASSIGN = "ASSIGN"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
PLUS = "PLUS"
MINUS = "MINUS"
TIMES = "TIMES"
EQ = "EQ"
NEQ = "NEQ"
LEQ = "LEQ"
LT = "LT"
GEQ = "GEQ"
GT = "GT"

NUMBER = "NUMBER"
IDENT = "IDENT"

AND = "AND"
DIV = "DIV"
DO = "DO"
DONE = "DONE"
ELSE = "ELSE"
FALSE = "FALSE"
FI = "FI"
IF = "IF"
MOD = "MOD"
NOT = "NOT"
OR = "OR"
SKIP = "SKIP"
THEN = "THEN"
TRUE = "TRUE"
WHILE = "WHILE"

UNKNOWN = "UNKNOWN"

# Parser-side end marker, never emitted by tokenize()
EOF = "EOF"

symbol_tokens: dict[str, str] = {
    ":=": ASSIGN,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "+": PLUS,
    "-": MINUS,
    "*": TIMES,
    "=": EQ,
    "<>": NEQ,
    "<=": LEQ,
    "<": LT,
    ">=": GEQ,
    ">": GT,
}

keyword_tokens: dict[str, str] = {
    "and": AND,
    "div": DIV,
    "do": DO,
    "done": DONE,
    "else": ELSE,
    "false": FALSE,
    "fi": FI,
    "if": IF,
    "mod": MOD,
    "not": NOT,
    "or": OR,
    "skip": SKIP,
    "then": THEN,
    "true": TRUE,
    "while": WHILE,
}

token_hashmap: dict[str, str] = {**symbol_tokens, **keyword_tokens}

MAX_SYMBOL_LENGTH = max(len(s) for s in symbol_tokens)
