"""
mal.printer - Render terms back to text

The printer is the structural inverse of the reader: integers print as
decimal digits, symbols print their text unchanged and lists print their
elements separated by single spaces inside parens. No escaping and no
pretty-printing is done here.

Lists are walked with an explicit stack of iterators, so anything the
reader can produce can be printed regardless of nesting depth.
"""

from mal.types import Integer, List, Symbol

_END = object()


def _pr_atom(term) -> str:
    if isinstance(term, Integer):
        return str(term.value)
    elif isinstance(term, Symbol):
        return term.name
    else:
        raise TypeError(f"Cannot print {type(term).__name__}: not a term")


def pr_str(term) -> str:
    """Return the textual representation of a term."""
    if not isinstance(term, List):
        return _pr_atom(term)

    out = ["("]
    stack = [iter(term.items)]
    first = True
    while stack:
        item = next(stack[-1], _END)
        if item is _END:
            stack.pop()
            out.append(")")
            first = False
            continue
        if not first:
            out.append(" ")
        if isinstance(item, List):
            out.append("(")
            stack.append(iter(item.items))
            first = True
        else:
            out.append(_pr_atom(item))
            first = False
    return "".join(out)


# Public name used by callers outside the read-print loop
print_str = pr_str


__all__ = ["pr_str", "print_str"]
