"""
Interactive read-parse-print loop for Sprig expressions.

Each input line is tokenized and parsed as one expression and the tree is
printed back. A few line commands change what is shown:

    tokens-mode          toggle printing tokens instead of the tree
    verbose-mode         toggle also printing the parenthesised source form
    format <name>        switch tree output to sexpr, source or json
    exit / quit          leave the REPL (Ctrl-D and Ctrl-C also work)
"""

import logging

from sprig.sprig_cli import FORMATS, format_token
from sprig.sprig_errors import SprigError
from sprig.sprig_format import SourceEmitter
from sprig.sprig_lexer import tokenize
from sprig.sprig_parser import Parser

logger = logging.getLogger(__name__)

REPL_FILENAME = "<repl>"


class ReplState:
    """Toggles that persist across REPL lines."""

    def __init__(self, fmt: str = "sexpr", verbose: bool = False) -> None:
        self.fmt = fmt
        self.verbose = verbose
        self.tokens_mode = False


def handle_command(src: str, state: ReplState) -> bool:
    """Applies a REPL command line. Returns False if `src` is not a command."""
    if src == "tokens-mode":
        state.tokens_mode = not state.tokens_mode
        print(f"[mode] >>> Tokens mode {'ON' if state.tokens_mode else 'OFF'}")
        return True
    if src == "verbose-mode":
        state.verbose = not state.verbose
        print(f"[mode] >>> Verbose mode {'ON' if state.verbose else 'OFF'}")
        return True
    if src.startswith("format ") or src == "format":
        name = src[len("format") :].strip()
        if name not in FORMATS:
            choices = ", ".join(FORMATS)
            print(f"[error] >>> Unknown format {name!r}; choose from {choices}")
        else:
            state.fmt = name
            print(f"[mode] >>> Format {name}")
        return True
    return False


def eval_line(src: str, state: ReplState, emitter: SourceEmitter) -> None:
    """Tokenizes and parses one line, printing the result or the error."""
    try:
        tokens = tokenize(src, REPL_FILENAME)
        if state.tokens_mode:
            for tok in tokens:
                print(format_token(tok))
            return
        ast = Parser(tokens, REPL_FILENAME).parse()
    except SprigError as e:
        print("[error] >>>")
        print(e)
        return

    if state.verbose:
        print(f"[source] >>> {emitter.to_source(ast)}")
    if state.fmt == "json":
        print(emitter.to_json(ast))
    elif state.fmt == "source":
        print(emitter.to_source(ast))
    else:
        print(emitter.to_sexpr(ast))


def start_repl(fmt: str = "sexpr", verbose: bool = False) -> None:
    print(f"Sprig REPL [format={fmt}]. Type 'exit' or 'quit' to leave.")
    state = ReplState(fmt, verbose)
    emitter = SourceEmitter()

    while True:
        try:
            src = input(">>> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Sprig REPL.")
            break
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting Sprig REPL.")
            return
        if handle_command(src, state):
            continue
        logger.debug("repl line: %r", src)
        eval_line(src, state, emitter)


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
