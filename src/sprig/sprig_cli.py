"""
Sprig CLI Entrypoint.

This module provides the command-line interface for inspecting Sprig expressions.
It reads source text, runs the tokenizer and parser, and prints the result.

Features:
    - Read source from `.sprig` files or inline strings.
    - Print the token stream, or the AST as an S-expression, source, or JSON.
    - Report lexical and syntax errors as `file:line:col: error: message`.
    - Launch an interactive REPL.

Example usage:
    sprig expr.sprig
    sprig -s "a = b = 3"
    sprig -s "f(1, 2).x" --format json
    sprig -s "0x1A + 1" --tokens
    sprig --repl --verbose

Functions:
    run_sprig(source: str, is_string: bool = False, show_tokens: bool = False,
              fmt: str = "sexpr") -> None:
        Executes the pipeline (read → tokenize → parse → print).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or run).
"""

import argparse
import logging
import sys

from sprig.sprig_errors import SprigError
from sprig.sprig_format import SourceEmitter, format_number
from sprig.sprig_lexer import Token, tokenize
from sprig.sprig_parser import Parser

logger = logging.getLogger(__name__)

FORMATS = ("sexpr", "source", "json")


def format_token(tok: Token) -> str:
    value = format_number(tok.value) if tok.type == "NUMBER" else tok.value
    return f"{tok.line}:{tok.col}\t{tok.type}\t{value!s}\t(len={tok.length})"


def run_sprig(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    fmt: str = "sexpr",
) -> None:
    """
    Run the Sprig toolchain: read, tokenize, parse, and print.

    Args:
        source (str): Sprig source text or path to a `.sprig` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): If True, prints the token stream instead of the AST.
        fmt (str): AST rendering, one of 'sexpr', 'source' or 'json'.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.sprig',
            or `fmt` is unknown.
        SprigError: If the source fails to tokenize or parse.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt!r}")
    if not is_string and not source.endswith(".sprig"):
        raise ValueError("Only .sprig files are supported.")

    filename = None
    if not is_string:
        filename = source
        with open(source, encoding="utf-8") as f:
            source = f.read()
        logger.debug("read %d characters from %s", len(source), filename)

    tokens = tokenize(source, filename)
    if show_tokens:
        for tok in tokens:
            print(format_token(tok))
        return

    ast = Parser(tokens, filename).parse()

    emitter = SourceEmitter()
    if fmt == "json":
        print(emitter.to_json(ast))
    elif fmt == "source":
        print(emitter.to_source(ast))
    else:
        print(emitter.to_sexpr(ast))


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Sprig CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the pipeline (read → tokenize → parse → print).

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream instead of the AST.
        - `-f`, `--format`: AST rendering ('sexpr', 'source' or 'json'), default 'sexpr'.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable debug logging (and verbose REPL mode).

    Errors from the tokenizer or parser are printed to stderr and exit with status 1.
    """
    args_list = sys.argv[1:] if argv is None else argv
    if not args_list:
        from sprig.sprig_repl import start_repl

        start_repl()
        return

    parser = argparse.ArgumentParser(prog="sprig")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="sexpr",
        help="AST output format (default: sexpr)",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Debug logging / verbose REPL mode"
    )

    args = parser.parse_args(args_list)
    configure_logging(args.verbose)

    if args.repl or args.source is None:
        from sprig.sprig_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        run_sprig(
            source=args.source,
            is_string=args.string,
            show_tokens=args.tokens,
            fmt=args.fmt,
        )
    except SprigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
