"""Build configuration: request parameter names, caps, dialect, server descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .descriptors import Filter, Group, Sort


class BindType(IntEnum):
    """Bind-variable syntax of the target database."""

    UNKNOWN = 0
    QUESTION = 1  # ?      qmark (aiosqlite, pyodbc)
    DOLLAR = 2  # $1     numeric_dollar (asyncpg)
    NAMED = 3  # :arg1  named (oracledb)
    AT = 4  # @p1    T-SQL text, no DBAPI paramstyle

    @classmethod
    def for_paramstyle(cls, paramstyle: str) -> BindType:
        """
        Bind type matching a DBAPI ``paramstyle`` (``conn.dialect.paramstyle``).

        Raises:
            ValueError: for styles the rebinder cannot produce
                (``format``, ``pyformat``, ``numeric``).
        """
        try:
            return _PARAMSTYLE_BIND_TYPES[paramstyle]
        except KeyError:
            raise ValueError(
                f"unsupported paramstyle {paramstyle!r}; "
                f"expected one of {sorted(_PARAMSTYLE_BIND_TYPES)}"
            ) from None


_PARAMSTYLE_BIND_TYPES: dict[str, BindType] = {
    "qmark": BindType.QUESTION,
    "numeric_dollar": BindType.DOLLAR,
    "named": BindType.NAMED,
}


@dataclass(frozen=True)
class QueryConfig:
    """
    Immutable settings for building one kind of list query.

    Attributes:
        filter_param: Request parameter holding the JSON filter array.
        order_param: Request parameter holding the JSON sort array.
        group_param: Request parameter holding the JSON group array.
        limit_param: Request parameter holding the page size.
        offset_param: Request parameter holding the row offset.
        limit: Default page size and the maximum a client may request.
        offset: Maximum offset a client may request; ``0`` means no cap.
        can_multi_column_order: Render every sort entry, not just the first.
        can_multi_column_group: Render every group entry, not just the first.
        bind_type: Placeholder syntax of the final query.
        prepend_filters: Server filters rendered before the client's.
        prepend_sorts: Server sorts rendered before the client's.
        prepend_groups: Server groups rendered before the client's.
        default_sorts: Sorts applied when the client sends none.
        exclude_filters: Ignore client filters (prepends still apply).
        exclude_sorts: Ignore client sorts (prepends still apply).
        exclude_groups: Ignore client groups (prepends still apply).
        exclude_limit_offset: Do not add ``limit ? offset ?``.
        disable_group_reconciliation: Do not copy sort columns into GROUP BY.
    """

    filter_param: str = "filters"
    order_param: str = "sorts"
    group_param: str = "groups"
    limit_param: str = "take"
    offset_param: str = "skip"

    limit: int = 100
    offset: int = 0

    can_multi_column_order: bool = True
    can_multi_column_group: bool = True

    bind_type: BindType = BindType.QUESTION

    prepend_filters: tuple[Filter, ...] = ()
    prepend_sorts: tuple[Sort, ...] = ()
    prepend_groups: tuple[Group, ...] = ()
    default_sorts: tuple[Sort, ...] = ()

    exclude_filters: bool = False
    exclude_sorts: bool = False
    exclude_groups: bool = False
    exclude_limit_offset: bool = False
    disable_group_reconciliation: bool = False

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset cap must not be negative, got {self.offset}")
        params = [
            self.filter_param,
            self.order_param,
            self.group_param,
            self.limit_param,
            self.offset_param,
        ]
        if any(not p for p in params):
            raise ValueError("request parameter names must not be empty")
        if len(set(params)) != len(params):
            raise ValueError(f"request parameter names must be distinct: {params}")
        # accept lists from callers but store tuples
        for name in _DESCRIPTOR_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))


_DESCRIPTOR_FIELDS = (
    "prepend_filters",
    "prepend_sorts",
    "prepend_groups",
    "default_sorts",
)
