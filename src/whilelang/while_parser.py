"""
WHILE Language Parser

Parses WHILE language tokens into an immutable abstract syntax tree.

This module implements a predictive recursive-descent parser over the flat list
of `Token` objects produced by `while_lexer`. Every grammar alternative is
chosen from the next token alone, and once chosen it is never abandoned for a
sibling alternative.

Grammar
-------
    program    := statement program?
    statement  := "while" bool_expr "do" program "done"
                | "if" bool_expr "then" program ("else" program)? "fi"
                | "skip" ";"
                | IDENT ":=" arith_expr ";"
    arith_expr := summand (("+" | "-") summand)*
    summand    := factor (("*" | "div" | "mod") factor)*
    factor     := "(" arith_expr ")" | NUMBER | IDENT
    bool_expr  := disjunct ("or" disjunct)*
    disjunct   := conjunct ("and" conjunct)*
    conjunct   := "(" bool_expr ")" | "not" conjunct | "true" | "false"
                | arith_expr rel_op arith_expr
    rel_op     := "=" | "<>" | "<" | "<=" | ">" | ">="

The left-recursive productions (`arith_expr`, `summand`, `bool_expr`,
`disjunct`) are parsed as loops that fold each `(operator, operand)` pair into
the accumulator, so every binary chain nests to the left.

A conjunct starting with "(" is always a parenthesised boolean expression;
a comparison whose left operand starts with "(" is not accepted.

Entry Points
------------
- `parse(source)`: Lex and parse a whole program from source text.
- `Parser(tokens).parse()`: Parse a whole program from a token list.
- `parse_statement()`, `parse_arith_expr()`, `parse_bool_expr()`: Parse a
  single construct starting at the current position.

Raises
------
SyntaxError
    Raised on the first token that no grammar rule at that position accepts,
    including running out of tokens and any UNKNOWN token. Input nested deeper
    than the interpreter recursion limit allows is rejected the same way. No
    partial tree is returned.
"""

from __future__ import annotations

from whilelang.while_ast import (
    ArithExpr,
    ArithOp,
    Assign,
    BinaryArith,
    BinaryBool,
    BoolExpr,
    BoolOp,
    Constant,
    FalseConst,
    If,
    Not,
    Program,
    Relational,
    RelOp,
    Skip,
    Statement,
    TrueConst,
    Variable,
    While,
)
from whilelang.while_constants import (
    AND,
    ASSIGN,
    DIV,
    DO,
    DONE,
    ELSE,
    EOF,
    EQ,
    FALSE,
    FI,
    GEQ,
    GT,
    IDENT,
    IF,
    LEQ,
    LPAREN,
    LT,
    MINUS,
    MOD,
    NEQ,
    NOT,
    NUMBER,
    OR,
    PLUS,
    RPAREN,
    SEMICOLON,
    SKIP,
    THEN,
    TIMES,
    TRUE,
    WHILE,
)
from whilelang.while_lexer import Token, tokenize

# TOKEN MAPPINGS (PARSER)

additive_ops: dict[str, ArithOp] = {
    PLUS: ArithOp.ADD,
    MINUS: ArithOp.SUB,
}

multiplicative_ops: dict[str, ArithOp] = {
    TIMES: ArithOp.MUL,
    DIV: ArithOp.INT_DIV,
    MOD: ArithOp.MOD,
}

relational_ops: dict[str, RelOp] = {
    EQ: RelOp.EQ,
    NEQ: RelOp.NEQ,
    LT: RelOp.LT,
    LEQ: RelOp.LEQ,
    GT: RelOp.GT,
    GEQ: RelOp.GEQ,
}

statement_starts: frozenset[str] = frozenset({WHILE, IF, SKIP, IDENT})


class Parser:
    """
    WHILE Parser Class

    Transforms a list of lexical tokens into a `Program`. Each instance owns
    its position in the token list, so a parser is used for one parse only.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed. No EOF token is required; reading
        past the end yields one.
    position : int
        Current index into the token stream.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0

    def current(self) -> Token:
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else Token(EOF)
        )

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else Token(EOF)

    def advance(self) -> Token:
        self.position += 1
        return self.current()

    def match(self, *types: str) -> Token:
        """Consume and return the current token if its type is one of `types`."""
        tok = self.current()
        if tok.type in types:
            self.advance()
            return tok
        raise SyntaxError(f"Expected {' or '.join(types)}, got {tok}")

    def parse(self) -> Program:
        """Parse a full WHILE program; every token must be consumed."""
        try:
            program = self.parse_program()
        except RecursionError as e:
            raise SyntaxError("Program nested too deeply") from e
        if self.current().type != EOF:
            raise SyntaxError(f"Unexpected token after program: {self.current()}")
        return program

    # Statements

    def parse_program(self) -> Program:
        """Parse one statement, then as many more as follow."""
        statements: list[Statement] = [self.parse_statement()]
        while self.current().type in statement_starts:
            statements.append(self.parse_statement())
        return Program(tuple(statements))

    def parse_statement(self) -> Statement:
        tok = self.current()

        if tok.type == WHILE:
            return self.parse_while()
        if tok.type == IF:
            return self.parse_if()
        if tok.type == SKIP:
            return self.parse_skip()
        if tok.type == IDENT and self.peek().type == ASSIGN:
            return self.parse_assignment()

        raise SyntaxError(f"Expected statement, got {tok}")

    def parse_while(self) -> While:
        self.match(WHILE)
        cond = self.parse_bool_expr()
        self.match(DO)
        body = self.parse_program()
        self.match(DONE)
        return While(cond, body)

    def parse_if(self) -> If:
        """Parse `if ... then ... fi` or `if ... then ... else ... fi`."""
        self.match(IF)
        cond = self.parse_bool_expr()
        self.match(THEN)
        then_branch = self.parse_program()

        else_branch: Program | None = None
        if self.current().type == ELSE:
            self.advance()
            else_branch = self.parse_program()

        self.match(FI)
        return If(cond, then_branch, else_branch)

    def parse_skip(self) -> Skip:
        self.match(SKIP)
        self.match(SEMICOLON)
        return Skip()

    def parse_assignment(self) -> Assign:
        target = self.match(IDENT)
        if not isinstance(target.value, str):
            raise SyntaxError(f"Malformed identifier token: {target}")
        self.match(ASSIGN)
        expr = self.parse_arith_expr()
        self.match(SEMICOLON)
        return Assign(target.value, expr)

    # Arithmetic expressions

    def parse_arith_expr(self) -> ArithExpr:
        expr = self.parse_summand()
        while self.current().type in additive_ops:
            op = additive_ops[self.current().type]
            self.advance()
            expr = BinaryArith(op, expr, self.parse_summand())
        return expr

    def parse_summand(self) -> ArithExpr:
        expr = self.parse_factor()
        while self.current().type in multiplicative_ops:
            op = multiplicative_ops[self.current().type]
            self.advance()
            expr = BinaryArith(op, expr, self.parse_factor())
        return expr

    def parse_factor(self) -> ArithExpr:
        tok = self.current()

        if tok.type == LPAREN:
            self.advance()
            expr = self.parse_arith_expr()
            self.match(RPAREN)
            return expr
        if tok.type == NUMBER:
            if not isinstance(tok.value, int):
                raise SyntaxError(f"Malformed number token: {tok}")
            self.advance()
            return Constant(tok.value)
        if tok.type == IDENT:
            if not isinstance(tok.value, str):
                raise SyntaxError(f"Malformed identifier token: {tok}")
            self.advance()
            return Variable(tok.value)

        raise SyntaxError(f"Expected '(', number or identifier, got {tok}")

    # Boolean expressions

    def parse_bool_expr(self) -> BoolExpr:
        expr = self.parse_disjunct()
        while self.current().type == OR:
            self.advance()
            expr = BinaryBool(BoolOp.OR, expr, self.parse_disjunct())
        return expr

    def parse_disjunct(self) -> BoolExpr:
        expr = self.parse_conjunct()
        while self.current().type == AND:
            self.advance()
            expr = BinaryBool(BoolOp.AND, expr, self.parse_conjunct())
        return expr

    def parse_conjunct(self) -> BoolExpr:
        tok = self.current()

        if tok.type == LPAREN:
            self.advance()
            expr = self.parse_bool_expr()
            self.match(RPAREN)
            return expr
        if tok.type == NOT:
            self.advance()
            return Not(self.parse_conjunct())
        if tok.type == TRUE:
            self.advance()
            return TrueConst()
        if tok.type == FALSE:
            self.advance()
            return FalseConst()

        return self.parse_relation()

    def parse_relation(self) -> Relational:
        left = self.parse_arith_expr()
        tok = self.current()
        if tok.type not in relational_ops:
            raise SyntaxError(f"Expected relational operator, got {tok}")
        self.advance()
        right = self.parse_arith_expr()
        return Relational(relational_ops[tok.type], left, right)


def parse(source: str) -> Program:
    """Lex and parse WHILE source text into a `Program`.

    Raises:
        SyntaxError: If the source is not a well-formed WHILE program.
    """
    return Parser(tokenize(source)).parse()


__all__ = ["Parser", "parse"]
