"""
mal.reader - Tokenizer and Reader for mal source text

This module turns raw source text into a single term.

Components:
- Token: A lexeme with its source location
- tokenize(): Lazily converts source text to tokens
- Reader: Single-lookahead cursor that converts tokens to terms
- read_str(): Convenience function to read one form from a string

The reader produces terms using types from mal.types:
- Integer: tokens that are entirely an optionally signed run of digits
- Symbol: every other token, verbatim
- List: (...) forms
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from mal.types import Integer, List, SourceLocation, Symbol, UnexpectedEOF

# =============================================================================
# Tokenizer
# =============================================================================


@dataclass(frozen=True)
class Token:
    """A token with its source location."""

    value: str  # The exact matched text
    line: int  # 1-based line number
    col: int  # 0-based column offset

    def __repr__(self):
        return f"Token({self.value!r}, {self.line}:{self.col})"

    def get_location(self) -> SourceLocation:
        return SourceLocation(self.line, self.col)


# Separators (whitespace and commas) are consumed before the capture group
# and never tokenized. Alternatives, in order:
#   ~@                    splice marker
#   [\[\]{}()'`~^@]       single structural character
#   "(?:\\.|[^\\"])*"?    string, closing quote optional
#   ;.*                   comment to end of line
#   [^\s\[\]{}('"`,;)]+   symbols, numbers and other bare words
TOKEN_RE = re.compile(
    r"""[\s,]*(~@|[\[\]{}()'`~^@]|"(?:\\.|[^\\"])*"?|;.*|[^\s\[\]{}('"`,;)]+)"""
)

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def tokenize(src: str) -> Iterator[Token]:
    """
    Lazily tokenize source text into Tokens with source locations.

    An unterminated string is not an error here: it becomes a single
    token running to the end of input.
    """
    line = 1
    line_start = 0
    scanned = 0
    for match in TOKEN_RE.finditer(src):
        start = match.start(1)
        newlines = src.count("\n", scanned, start)
        if newlines:
            line += newlines
            line_start = src.rfind("\n", scanned, start) + 1
        scanned = start
        yield Token(match.group(1), line, start - line_start)


# =============================================================================
# Reader
# =============================================================================


class Reader:
    """
    Cursor over a token sequence holding at most one token of lookahead.

    A Reader is created for one top-level read and discarded afterwards.
    """

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = iter(tokens)
        self.head: Optional[Token] = next(self.tokens, None)

    def eof(self) -> bool:
        return self.head is None

    def peek(self) -> Optional[Token]:
        """Return the current token without consuming it."""
        return self.head

    def next(self) -> Optional[Token]:
        """Return the current token and advance past it."""
        tok = self.head
        if tok is not None:
            self.head = next(self.tokens, None)
        return tok

    def read_form(self):
        """Read a single form from the token stream."""
        tok = self.peek()
        if tok is None:
            raise UnexpectedEOF("unexpected EOF")
        if tok.value == "(":
            self.next()
            return self.read_list(tok)
        return self.read_atom()

    def read_list(self, open_tok: Token) -> List:
        """
        Read forms until the list opened by open_tok is closed.

        Nested lists are kept on an explicit stack of (open token, items)
        frames, so nesting depth is not limited by the interpreter's
        recursion limit. The close paren is read as an ordinary atom and
        recognized by value; it closes the innermost open list.
        """
        stack: list[tuple[Token, list]] = [(open_tok, [])]
        while True:
            top_tok, items = stack[-1]
            tok = self.peek()
            if tok is None:
                loc = top_tok.get_location()
                raise UnexpectedEOF(f"EOF while reading list opened at {loc}", loc)
            if tok.value == "(":
                self.next()
                stack.append((tok, []))
                continue
            form = self.read_atom()
            if isinstance(form, Symbol) and form.name == ")":
                stack.pop()
                lst = List(items, top_tok.line, top_tok.col)
                if not stack:
                    return lst
                stack[-1][1].append(lst)
            else:
                items.append(form)

    def read_atom(self):
        """Read an integer or, failing that, a symbol."""
        tok = self.next()
        if tok is None:
            raise UnexpectedEOF("unexpected EOF")
        if INTEGER_RE.fullmatch(tok.value):
            try:
                return Integer(int(tok.value), tok.line, tok.col)
            except ValueError:
                # Past the interpreter's int string conversion digit limit
                pass
        return Symbol(tok.value, tok.line, tok.col)


# =============================================================================
# Convenience Functions
# =============================================================================


def read_str(src: str):
    """Tokenize src and read one top-level form. Later tokens are ignored."""
    rdr = Reader(tokenize(src))
    return rdr.read_form()


__all__ = [
    "Token",
    "tokenize",
    "TOKEN_RE",
    "Reader",
    "read_str",
]
