"""
Fluent builder that adds clauses to a base SELECT.

Example::

    query, args = (
        SelectBuilder("select u.id, u.name from users u")
        .where("u.status = ?", "active")
        .where("u.age >= ?", 18)
        .order_by("u.name asc")
        .limit_offset(20, 40)
        .render()
    )
    # → "select u.id, u.name from users u where u.status = ? and u.age >= ?
    #    order by u.name asc limit ? offset ?", ["active", 18, 20, 40]

The base query is scanned once for top-level WHERE / GROUP BY / ORDER BY.
Conditions go in front of any GROUP BY, HAVING, ORDER BY or LIMIT the base
already carries; group columns in front of HAVING / ORDER BY; sort columns
in front of LIMIT.  An existing clause is continued with ``and`` or ``,``
instead of being opened again.  ``limit_offset`` always goes last, so the
base must not carry its own LIMIT when paging is requested.
"""

from __future__ import annotations

from typing import Any

from .lexer import clause_layout


class SelectBuilder:
    """Per-call build state: query text, ordered args and open-clause flags."""

    def __init__(self, base: str) -> None:
        layout = clause_layout(base)
        self._base = base
        self._cuts = (layout.where_at, layout.group_at, layout.order_at)
        self._where: list[str] = []
        self._group: list[str] = []
        self._order: list[str] = []
        self._tail: list[str] = []
        self._args: list[Any] = []
        self._has_where = layout.has_where
        self._has_group = layout.has_group
        self._has_order = layout.has_order

    @property
    def has_where(self) -> bool:
        return self._has_where

    @property
    def has_group(self) -> bool:
        return self._has_group

    @property
    def has_order(self) -> bool:
        return self._has_order

    # -- clauses -------------------------------------------------------------

    def where(self, condition: str, *args: Any) -> SelectBuilder:
        """Add *condition* to WHERE, joined with ``and`` if WHERE is open."""
        if not condition:
            return self
        keyword = "and" if self._has_where else "where"
        self._where.append(f" {keyword} {condition}")
        self._args.extend(args)
        self._has_where = True
        return self

    def group_by(self, columns: str) -> SelectBuilder:
        if not columns:
            return self
        prefix = ", " if self._has_group else " group by "
        self._group.append(prefix + columns)
        self._has_group = True
        return self

    def order_by(self, columns: str) -> SelectBuilder:
        if not columns:
            return self
        prefix = ", " if self._has_order else " order by "
        self._order.append(prefix + columns)
        self._has_order = True
        return self

    def limit_offset(self, limit: int, offset: int) -> SelectBuilder:
        self._tail.append(" limit ? offset ?")
        self._args.extend((limit, offset))
        return self

    # -- output --------------------------------------------------------------

    def render(self) -> tuple[str, list[Any]]:
        """Return the query text and a copy of its ordered arguments."""
        where_at, group_at, order_at = self._cuts
        segments = (
            (self._base[:where_at], self._where),
            (self._base[where_at:group_at], self._group),
            (self._base[group_at:order_at], self._order),
            (self._base[order_at:], self._tail),
        )
        parts: list[str] = []
        for text, inserted in segments:
            text = text.strip()
            if text:
                parts.append(f" {text}" if parts else text)
            parts.extend(inserted)
        return "".join(parts), list(self._args)


def count_select(column: str) -> str:
    """Select-list expression for a total-count query: ``count(col) as total``."""
    return f"count({column}) as total"
