"""
mal - a reader and printer for a small Lisp notation

Phases:
1. Read (reader.py): Text -> Tokens -> Terms
2. Print (printer.py): Terms -> Text

The read-print loop (repl.py) and the command line (cli.py) sit on top.
"""

from mal.printer import pr_str, print_str
from mal.reader import Reader, Token, read_str, tokenize
from mal.types import (
    Integer,
    List,
    ReadError,
    SourceLocation,
    Symbol,
    Term,
    UnexpectedEOF,
    get_source_location,
)

__version__ = "0.1.0"

__all__ = [
    # Reader
    "Token",
    "tokenize",
    "Reader",
    "read_str",
    # Printer
    "pr_str",
    "print_str",
    # Terms
    "Integer",
    "Symbol",
    "List",
    "Term",
    "SourceLocation",
    "get_source_location",
    # Errors
    "ReadError",
    "UnexpectedEOF",
]
