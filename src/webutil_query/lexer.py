"""
Minimal SQL text scanner.

Only knows enough SQL to tell code apart from text that must never be
touched: single-quoted literals (``''`` escapes), double-quoted and
backtick-quoted identifiers, ``--`` line comments and ``/* */`` block
comments.  It reports ``?`` placeholders and top-level clause keywords,
i.e. words at parenthesis depth 0.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

PLACEHOLDER = "?"

_QUOTES = {"'": "'", '"': '"', "`": "`"}


class Token(NamedTuple):
    """A placeholder (``text == "?"``) or a bare word found in code."""

    text: str
    start: int
    depth: int


def _skip_quoted(sql: str, pos: int) -> int:
    """Return the index just past the quoted run starting at *pos*."""
    close = _QUOTES[sql[pos]]
    i = pos + 1
    n = len(sql)
    while i < n:
        if sql[i] == close:
            # doubled quote is an escaped quote
            if i + 1 < n and sql[i + 1] == close:
                i += 2
                continue
            return i + 1
        i += 1
    return n


def _skip_comment(sql: str, pos: int) -> int:
    if sql.startswith("--", pos):
        end = sql.find("\n", pos)
        return len(sql) if end == -1 else end + 1
    end = sql.find("*/", pos + 2)
    return len(sql) if end == -1 else end + 2


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def tokens(sql: str) -> Iterator[Token]:
    """Yield placeholders and words of *sql* that lie outside literals/comments."""
    i = 0
    depth = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        if ch in _QUOTES:
            i = _skip_quoted(sql, i)
        elif sql.startswith("--", i) or sql.startswith("/*", i):
            i = _skip_comment(sql, i)
        elif ch == "(":
            depth += 1
            i += 1
        elif ch == ")":
            depth = max(0, depth - 1)
            i += 1
        elif ch == PLACEHOLDER:
            yield Token(PLACEHOLDER, i, depth)
            i += 1
        elif _is_word_char(ch):
            start = i
            while i < n and _is_word_char(sql[i]):
                i += 1
            yield Token(sql[start:i], start, depth)
        else:
            i += 1


def placeholder_positions(sql: str) -> list[int]:
    """Offsets of every ``?`` placeholder in *sql*, left to right."""
    return [t.start for t in tokens(sql) if t.text == PLACEHOLDER]


class ClauseLayout(NamedTuple):
    """
    Top-level clauses of a SELECT and where new fragments must be inserted.

    ``where_at`` is the offset of the first clause that has to follow WHERE
    (GROUP BY, HAVING, WINDOW, ORDER BY, LIMIT, OFFSET, FETCH), ``group_at``
    the first one that has to follow GROUP BY and ``order_at`` the first one
    that has to follow ORDER BY.  Each is ``len(sql)`` when nothing follows.
    """

    has_where: bool
    has_group: bool
    has_order: bool
    where_at: int
    group_at: int
    order_at: int


# insertion points that lie before each trailing clause keyword
_PRECEDES: dict[str, tuple[str, ...]] = {
    "group": ("where",),
    "having": ("where", "group"),
    "window": ("where", "group"),
    "order": ("where", "group"),
    "limit": ("where", "group", "order"),
    "offset": ("where", "group", "order"),
    "fetch": ("where", "group", "order"),
}
_PAIRED = frozenset({"group", "order"})


def clause_layout(sql: str) -> ClauseLayout:
    """
    Detect top-level ``WHERE``, ``GROUP BY`` and ``ORDER BY`` in *sql* and
    the offsets at which further conditions and columns must go.

    Keywords inside sub-selects, literals, quoted identifiers or comments
    are ignored, as are words that merely contain a keyword
    (``where_clause``, ``ordered``).  Single-word clauses (``having``,
    ``limit``, ...) only count after the top-level ``from``, so a column
    named ``offset`` in the select list is not mistaken for one.
    """
    has_where = has_group = has_order = False
    seen_from = False
    cuts = dict.fromkeys(("where", "group", "order"), len(sql))
    previous: Token | None = None
    for token in tokens(sql):
        if token.depth != 0 or token.text == PLACEHOLDER:
            previous = None
            continue
        word = token.text.lower()
        clause: Token | None = None
        if word == "from":
            seen_from = True
        elif word == "where":
            has_where = True
        elif word == "by" and previous is not None:
            if previous.text.lower() in _PAIRED:
                clause = previous
        elif seen_from and word in _PRECEDES and word not in _PAIRED:
            clause = token
        if clause is not None:
            keyword = clause.text.lower()
            has_group = has_group or keyword == "group"
            has_order = has_order or keyword == "order"
            for name in _PRECEDES[keyword]:
                cuts[name] = min(cuts[name], clause.start)
        previous = token
    return ClauseLayout(
        has_where,
        has_group,
        has_order,
        cuts["where"],
        cuts["group"],
        cuts["order"],
    )
