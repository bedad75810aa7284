"""
mal.types - Core type definitions for mal

This module contains the term types produced by the reader and consumed
by the printer:
- Integer: Exact signed integers
- Symbol: Identifiers and every other bare token
- List: Parenthesized sequences of terms
- SourceLocation: line/column information for error messages
- ReadError / UnexpectedEOF: errors raised while reading

Terms read from text carry their source position, but positions never
take part in equality, so a term read from "(1 2)" compares equal to a
hand-built List([Integer(1), Integer(2)]).
"""

from dataclasses import dataclass, field
from typing import Optional, Union

# =============================================================================
# Source Location Tracking
# =============================================================================


@dataclass(frozen=True)
class SourceLocation:
    """Holds source location information for error messages."""

    line: int = 0  # 1-based line number
    col: int = 0  # 0-based column offset

    def __str__(self):
        return f"line {self.line}, col {self.col}"

    def __repr__(self):
        return f"SourceLocation({self.line}:{self.col})"


# =============================================================================
# Terms
# =============================================================================


@dataclass
class Integer:
    """An exact signed integer."""

    value: int
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)

    def __repr__(self):
        return f"Integer({self.value})"


@dataclass
class Symbol:
    """
    Represents a symbolic identifier.

    Anything the reader cannot interpret as an integer becomes a Symbol
    holding the token text verbatim, including the ")" close marker,
    string literals with their quotes and comments.

    Attributes:
        name: The text of the symbol
        line: Source line number (1-based), 0 when built by hand
        col: Source column number (0-based)
    """

    name: str
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)

    def __repr__(self):
        return f"Symbol({self.name!r})"


@dataclass
class List:
    """An ordered sequence of terms. May be empty and may nest."""

    items: list = field(default_factory=list)
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)

    def __repr__(self):
        return f"List({self.items!r})"


Term = Union[Integer, Symbol, List]

TERM_TYPES = (Integer, Symbol, List)


def get_source_location(term) -> Optional[SourceLocation]:
    """Extract the source location of a term read from text, if any."""
    if isinstance(term, TERM_TYPES) and term.line > 0:
        return SourceLocation(term.line, term.col)
    return None


# =============================================================================
# Errors
# =============================================================================


class ReadError(SyntaxError):
    """Base class for errors raised while reading source text."""

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.location = location

    def __str__(self):
        return self.msg


class UnexpectedEOF(ReadError):
    """
    Raised when input ends before a form is syntactically closed.

    This is the "need more input" signal: an empty line, or an open paren
    with no matching close paren. Callers may prompt for more input and
    retry, since the reader keeps no state between calls.
    """

    def __init__(self, message: str = "EOF", location: Optional[SourceLocation] = None):
        super().__init__(message, location)


__all__ = [
    "SourceLocation",
    "Integer",
    "Symbol",
    "List",
    "Term",
    "TERM_TYPES",
    "get_source_location",
    "ReadError",
    "UnexpectedEOF",
]
