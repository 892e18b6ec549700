"""
WHILE CLI Entrypoint.

This module provides the command-line interface for the WHILE front end.
It reads a program, runs it through the lexer and parser, and prints the
result.

Features:
    - Read source from `.while` files or inline strings.
    - Print the abstract syntax tree as JSON, or the raw token stream.
    - Output to console or file.

Example usage:
    whilelang factorial.while
    whilelang -s "x := 1;" -p
    whilelang factorial.while --tokens
    whilelang factorial.while -o factorial.json

Functions:
    run_while(source: str, is_string: bool = False, out: Optional[str] = None,
              pretty: bool = False, tokens_only: bool = False) -> None:
        Executes the pipeline (lex → parse → output).

    main(argv: Optional[list[str]] = None) -> None:
        Parses CLI arguments, runs the pipeline and maps failures to exit status 1.
"""

import argparse
import json
import sys

from whilelang.while_lexer import tokenize
from whilelang.while_parser import Parser


def run_while(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    pretty: bool = False,
    tokens_only: bool = False,
) -> None:
    """
    Run the WHILE front end: lex, parse, and write the AST or tokens.

    Args:
        source (str): The WHILE source code or path to a `.while` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the output to. If None, prints to stdout.
        pretty (bool): If True, indents the JSON and prints a banner.
        tokens_only (bool): If True, stops after lexing and writes one token per line.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.while'.
        SyntaxError: If the program does not parse.
        OSError: If the source file cannot be read or the output cannot be written.
    """
    if not is_string and not source.endswith(".while"):
        raise ValueError("Only .while files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = tokenize(source)

    # 3. Parsing
    if tokens_only:
        text = "\n".join(repr(tok) for tok in tokens)
    else:
        ast = Parser(tokens).parse()
        text = json.dumps(ast.to_dict(), indent=2 if pretty else None)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        title = "Tokens" if tokens_only else "Abstract Syntax Tree"
        print(f"{banner}\n{title}\n{banner}\n{text}\n{banner}")
    else:
        print(text)


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the WHILE CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Indent the JSON and show banners.
        - `--tokens`: Print the token stream instead of the AST.

    Exits with status 1 after printing the message to stderr when the program
    does not parse or the file cannot be read.
    """
    parser = argparse.ArgumentParser(prog="whilelang")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Indent output and show banners"
    )
    parser.add_argument(
        "--tokens",
        dest="tokens_only",
        action="store_true",
        help="Print the token stream instead of the AST",
    )

    args = parser.parse_args(argv)

    try:
        run_while(
            source=args.source,
            is_string=args.string,
            out=args.out,
            pretty=args.pretty,
            tokens_only=args.tokens_only,
        )
    except SyntaxError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
