"""
Lexical analyzer for the WHILE language.

This module converts raw source text into a flat list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters one at a time.
    Token: A single token with a type and an optional value.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    tokenize(source): Lex a whole source string into a list of tokens.

Features:
    - Skips any run of whitespace (anything `str.isspace` accepts)
    - Longest-match recognition of operators (`:=`, `<>`, `<=`, `>=` beat `<`, `>`)
    - Recognizes non-negative integer numbers, identifiers and keywords
    - Never fails: an unrecognized character becomes an UNKNOWN token and is
      left for the parser to reject

Example:
    >>> tokenize("x := 1;")
    [Token(IDENT, 'x'), Token(ASSIGN), Token(NUMBER, 1), Token(SEMICOLON)]

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from typing import Any

from whilelang.while_constants import (
    EOF,
    IDENT,
    MAX_SYMBOL_LENGTH,
    NUMBER,
    UNKNOWN,
    keyword_tokens,
    symbol_tokens,
)


class CharacterStream:
    """
    A utility for reading characters from a string source.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>"
            )
        char = self.source[self.position]
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the WHILE language.

    Attributes:
        type (str): The token type (e.g. 'IDENT', 'NUMBER', 'WHILE').
        value (int | str | None): The integer of a NUMBER, the raw text of an
            IDENT or UNKNOWN token, None for every other token.
    """

    def __init__(self, type_: str, value: int | str | None = None):
        self.type = type_
        self.value = value

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type})"
        return f"Token({self.type}, {self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))


class Lexer:
    """Lexical analyzer for the WHILE language.

    The Lexer takes a CharacterStream and converts it into a stream of Token
    objects. Once the stream is exhausted every call to `next_token` returns
    an EOF token.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips a maximal run of whitespace characters."""
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest symbol from the current position.

        Returns:
            Token | None: A Token if a symbol matches, otherwise None.
        """
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(MAX_SYMBOL_LENGTH):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in symbol_tokens:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(symbol_tokens[max_token])

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF)

        # 1. Compound or symbolic operator
        token = self.match_operator()
        if token:
            return token

        ch = self.peek()

        # 2. Number
        if ch.isdecimal():
            # int() on a long digit string hits sys.get_int_max_str_digits()
            num = 0
            while not self.stream.end_of_file() and self.peek().isdecimal():
                num = num * 10 + int(self.advance())
            return Token(NUMBER, num)

        # 3. Identifier or keyword
        if ch.isalpha():
            ident = ""
            while not self.stream.end_of_file() and self.peek().isalnum():
                ident += self.advance()
            if ident in keyword_tokens:
                return Token(keyword_tokens[ident])
            return Token(IDENT, ident)

        # 4. Unknown character, deferred to the parser
        return Token(UNKNOWN, self.advance())

    def tokens(self) -> Iterator[Token]:
        """Yields every token up to, but not including, EOF."""
        while True:
            tok = self.next_token()
            if tok.type == EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Lex `source` into a list of tokens. Never raises."""
    return list(Lexer(CharacterStream(source)).tokens())


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
