"""
Placeholder rewriting: IN-list expansion and dialect rebind.

Queries are written with generic ``?`` placeholders.  Before execution,
list-valued arguments are expanded into one placeholder per element
(``expand_in``) and the placeholders are rewritten into the bind-variable
syntax of the target database (``rebind``).

Example::

    in_query_rebind(BindType.DOLLAR, "select * from u where id in (?)", [1, 2])
    # → ("select * from u where id in ($1, $2)", [1, 2])
"""

from __future__ import annotations

from typing import Any

from .config import BindType
from .exceptions import QueryBuilderError
from .lexer import placeholder_positions


def is_in_list(arg: Any) -> bool:
    """``True`` for list/tuple arguments; text and byte strings bind as scalars."""
    return isinstance(arg, (list, tuple))


def expand_in(query: str, args: list[Any] | tuple[Any, ...]) -> tuple[str, list[Any]]:
    """
    Expand every list/tuple argument into one placeholder per element.

    Placeholders are consumed left to right, one argument each.  The
    elements of an expanded argument are spliced into the returned
    argument list at the position of the original argument.

    Raises:
        QueryBuilderError: ``REBIND`` when an IN-list is empty or the
            number of placeholders differs from the number of arguments.
    """
    positions = placeholder_positions(query)
    if len(positions) > len(args):
        raise QueryBuilderError.rebind(
            f"number of bind vars ({len(positions)}) exceeds "
            f"number of arguments ({len(args)})"
        )
    if len(positions) < len(args):
        raise QueryBuilderError.rebind(
            f"number of bind vars ({len(positions)}) less than "
            f"number of arguments ({len(args)})"
        )

    parts: list[str] = []
    flat: list[Any] = []
    cursor = 0
    for pos, arg in zip(positions, args):
        if not is_in_list(arg):
            flat.append(arg)
            continue
        if len(arg) == 0:
            raise QueryBuilderError.rebind("empty list passed to 'in' query")
        parts.append(query[cursor:pos])
        parts.append(", ".join(["?"] * len(arg)))
        cursor = pos + 1
        flat.extend(arg)
    parts.append(query[cursor:])
    return "".join(parts), flat


_PREFIXES: dict[BindType, str] = {
    BindType.DOLLAR: "$",
    BindType.NAMED: ":arg",
    BindType.AT: "@p",
}


def rebind(bind_type: BindType, query: str) -> str:
    """
    Rewrite ``?`` placeholders into *bind_type* syntax.

    Numbering starts at 1 and runs across the whole query.  ``QUESTION``
    and ``UNKNOWN`` return *query* unchanged.
    """
    prefix = _PREFIXES.get(bind_type)
    if prefix is None:
        return query

    parts: list[str] = []
    cursor = 0
    for number, pos in enumerate(placeholder_positions(query), start=1):
        parts.append(query[cursor:pos])
        parts.append(f"{prefix}{number}")
        cursor = pos + 1
    parts.append(query[cursor:])
    return "".join(parts)


def in_query_rebind(
    bind_type: BindType, query: str, *args: Any
) -> tuple[str, list[Any]]:
    """Run ``expand_in`` then ``rebind``."""
    query, flat = expand_in(query, args)
    return rebind(bind_type, query), flat
