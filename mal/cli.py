"""
mal.cli - mal Command Line Interface

- mal                   Start the interactive REPL
- mal --simple          Start the REPL without readline or history
- mal -c <code>         Read one form, print it back and exit
- mal -t <code>         Print the tokens of the given code and exit
"""

import argparse
import sys
from typing import Optional

from mal.reader import tokenize
from mal.repl import (
    DEFAULT_HISTORY_FILE,
    DEFAULT_PROMPT,
    ReplBackend,
    ReplConfig,
    create_repl,
    rep,
)
from mal.types import ReadError


def cmd_repl(args: argparse.Namespace) -> int:
    """Start the interactive REPL."""
    config = ReplConfig(
        prompt=args.prompt,
        history_file=args.history_file,
        use_history=not args.no_history,
        log_file=args.log,
    )

    if args.simple:
        repl_instance = create_repl(
            mode="simple",
            backend=ReplBackend(log_path=config.log_file),
            prompt=config.prompt,
        )
    else:
        repl_instance = create_repl(mode="terminal", config=config)
    repl_instance.run()
    return 0


def cmd_exec_code(code: str) -> int:
    """Read one form from code and print it back."""
    try:
        print(rep(code))
        return 0
    except ReadError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


def cmd_tokens(code: str) -> int:
    """Print the tokens of code, one per line."""
    for tok in tokenize(code):
        print(f"{tok.line}:{tok.col}\t{tok.value}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mal",
        description="mal - read and print Lisp forms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  mal                           Start interactive REPL
  mal -c "(1 (2 3) 4)"          Read a form and print it back
  mal -t "(+ 1 ~@xs)"           Show the tokens of some code
        """,
    )

    parser.add_argument(
        "-c",
        "--command",
        metavar="CODE",
        help="Read one form from CODE, print it and exit",
    )

    parser.add_argument(
        "-t",
        "--tokens",
        metavar="CODE",
        help="Print the tokens of CODE and exit",
    )

    parser.add_argument(
        "--simple",
        action="store_true",
        help="Use the plain REPL without readline or history",
    )

    parser.add_argument(
        "--prompt",
        default=DEFAULT_PROMPT,
        help=f"REPL prompt (default: {DEFAULT_PROMPT!r})",
    )

    parser.add_argument(
        "--history-file",
        default=DEFAULT_HISTORY_FILE,
        metavar="FILE",
        help=f"History file for the terminal REPL (default: {DEFAULT_HISTORY_FILE})",
    )

    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not load or save the history file",
    )

    parser.add_argument(
        "--log",
        metavar="FILE",
        help="Log file recording each evaluated line",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the mal CLI. Calls sys.exit with return code."""
    sys.exit(_main(argv))


def _main(argv: Optional[list[str]] = None) -> int:
    """Internal main that returns exit code."""
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.tokens is not None:
        return cmd_tokens(args.tokens)

    if args.command is not None:
        return cmd_exec_code(args.command)

    return cmd_repl(args)


if __name__ == "__main__":
    main()
