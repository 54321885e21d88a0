"""
Compile filter, sort and group descriptors into SQL fragments.

Every descriptor is checked against the ``FieldRegistry`` before anything
is rendered: the logical field must exist and allow the requested action.
Column names come only from the registry; client input reaches the query
solely as bind arguments.

Filter fragments use generic ``?`` placeholders.  A list value renders as
``<col> in (?)`` with the whole list as one argument; ``expand_in`` later
expands it into one placeholder per element.
"""

from __future__ import annotations

from difflib import get_close_matches
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from .descriptors import NULL_OPERATORS, FilterOperator, SortDirection
from .exceptions import ErrorKind, QueryBuilderError
from .lexer import PLACEHOLDER

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from .descriptors import Filter, Group, Sort
    from .fields import FieldConfig, FieldRegistry

FILTER = "filter"
SORT = "sort"
GROUP = "group"


class ValueTag(Enum):
    """Closed set of primitive filter value types."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"


def value_tag(value: Any) -> ValueTag | None:
    """Return the tag of *value*, or ``None`` if it is not a primitive."""
    # bool is a subclass of int
    if isinstance(value, bool):
        return ValueTag.BOOL
    if isinstance(value, int):
        return ValueTag.INT
    if isinstance(value, float):
        return ValueTag.FLOAT
    if isinstance(value, str):
        return ValueTag.STRING
    return None


_SCALAR_TAGS = frozenset(ValueTag)
_LIST_ITEM_TAGS = frozenset({ValueTag.STRING, ValueTag.INT, ValueTag.FLOAT})

_TEMPLATES: dict[FilterOperator, str] = {
    FilterOperator.EQ: "= ?",
    FilterOperator.NEQ: "!= ?",
    FilterOperator.STARTSWITH: "ilike ? || '%'",
    FilterOperator.ENDSWITH: "ilike '%' || ?",
    FilterOperator.CONTAINS: "ilike '%' || ? || '%'",
    FilterOperator.DOES_NOT_CONTAIN: "not ilike '%' || ? || '%'",
    FilterOperator.IS_NULL: "is null",
    FilterOperator.IS_NOT_NULL: "is not null",
    FilterOperator.IS_EMPTY: "= ''",
    FilterOperator.IS_NOT_EMPTY: "!= ''",
    FilterOperator.LT: "< ?",
    FilterOperator.LTE: "<= ?",
    FilterOperator.GT: "> ?",
    FilterOperator.GTE: ">= ?",
}

_IN_TEMPLATE = "in (?)"
_VALID_OPERATORS = [op.value for op in FilterOperator]


class CompiledFilters(NamedTuple):
    """Filter conditions joined with ``and`` plus their ordered arguments."""

    sql: str
    args: list[Any]


class CompiledColumns(NamedTuple):
    """Comma-joined sort/group entries and the logical fields they came from."""

    sql: str
    fields: list[str]


class PredicateCompiler:
    """Validate descriptors against a ``FieldRegistry`` and render them."""

    def __init__(self, fields: FieldRegistry) -> None:
        self._fields = fields

    # -- lookups -------------------------------------------------------------

    def field_for(self, name: str, operation: str) -> FieldConfig:
        """
        Return the config of *name* if it allows *operation*.

        Raises:
            QueryBuilderError: ``UNKNOWN_FIELD`` or ``OPERATION_NOT_ALLOWED``.
        """
        config = self._fields.lookup(name)
        if config is None:
            raise QueryBuilderError.unknown_field(name)
        allowed = {
            FILTER: config.allow_filter,
            SORT: config.allow_sort,
            GROUP: config.allow_group,
        }[operation]
        if not allowed:
            raise QueryBuilderError.not_allowed(name, operation)
        return config

    # -- filters -------------------------------------------------------------

    def compile_filter(self, descriptor: Filter) -> CompiledFilters:
        """Render one filter as ``<col> <template>`` with its arguments."""
        config = self.field_for(descriptor.field, FILTER)
        operator = _parse_operator(descriptor)

        if operator in NULL_OPERATORS:
            value = None
        else:
            value = _check_value(descriptor.field, descriptor.value)
            if config.value_transform is not None:
                value = _transform(config.value_transform, descriptor.field, value)

        if isinstance(value, (list, tuple)):
            template = _IN_TEMPLATE
        else:
            template = _TEMPLATES[operator]
        args = [value] if PLACEHOLDER in template else []
        return CompiledFilters(f"{config.physical_column} {template}", args)

    def compile_filters(self, filters: Iterable[Filter]) -> CompiledFilters:
        fragments: list[str] = []
        args: list[Any] = []
        for descriptor in filters:
            compiled = self.compile_filter(descriptor)
            fragments.append(compiled.sql)
            args.extend(compiled.args)
        return CompiledFilters(" and ".join(fragments), args)

    # -- sorts / groups ------------------------------------------------------

    def compile_sorts(
        self, sorts: Sequence[Sort], *, multi_column: bool = True
    ) -> CompiledColumns:
        entries: list[str] = []
        names: list[str] = []
        for descriptor in _limit(sorts, multi_column):
            config = self.field_for(descriptor.field, SORT)
            if descriptor.dir not in _DIRECTIONS:
                raise QueryBuilderError.invalid_dir(descriptor.field, descriptor.dir)
            entries.append(f"{config.physical_column} {descriptor.dir}")
            names.append(descriptor.field)
        return CompiledColumns(", ".join(entries), names)

    def compile_groups(
        self, groups: Sequence[Group], *, multi_column: bool = True
    ) -> CompiledColumns:
        entries: list[str] = []
        names: list[str] = []
        for descriptor in _limit(groups, multi_column):
            config = self.field_for(descriptor.field, GROUP)
            entries.append(config.physical_column)
            names.append(descriptor.field)
        return CompiledColumns(", ".join(entries), names)

    def reconcile_groups(
        self, grouped: Sequence[str], sorts: Sequence[Sort]
    ) -> CompiledColumns:
        """
        Columns that must be added to GROUP BY so every sort field is grouped.

        Sort fields already in *grouped* (logical names) are skipped; each
        remaining field is added once, in sort order.

        Raises:
            QueryBuilderError: if a sort field is unknown or not sortable.
        """
        seen = set(grouped)
        entries: list[str] = []
        names: list[str] = []
        for descriptor in sorts:
            config = self.field_for(descriptor.field, SORT)
            if descriptor.field in seen:
                continue
            seen.add(descriptor.field)
            entries.append(config.physical_column)
            names.append(descriptor.field)
        return CompiledColumns(", ".join(entries), names)


_DIRECTIONS = frozenset(d.value for d in SortDirection)


def _limit(items: Sequence[Any], multi_column: bool) -> Sequence[Any]:
    return items if multi_column else items[:1]


def _parse_operator(descriptor: Filter) -> FilterOperator:
    try:
        return FilterOperator(descriptor.operator)
    except ValueError:
        suggestions = get_close_matches(
            descriptor.operator, _VALID_OPERATORS, n=3, cutoff=0.6
        )
        message = (
            f"invalid operator {descriptor.operator!r} "
            f"for field {descriptor.field!r}."
        )
        if suggestions:
            message += f" Did you mean: {', '.join(suggestions)}?"
        raise QueryBuilderError(
            ErrorKind.INVALID_OPERATOR,
            message,
            field=descriptor.field,
            operation=descriptor.operator,
        ) from None


def _check_value(field: str, value: Any) -> Any:
    if value is None:
        raise QueryBuilderError.invalid_value(field, None, "missing value")
    if isinstance(value, (list, tuple)):
        for item in value:
            if value_tag(item) not in _LIST_ITEM_TAGS:
                raise QueryBuilderError.invalid_slice(field, type(item).__name__)
        return list(value)
    if value_tag(value) not in _SCALAR_TAGS:
        raise QueryBuilderError.invalid_value(
            field,
            type(value).__name__,
            f"invalid value type ({type(value).__name__}) for field {field!r}",
        )
    return value


def _transform(transform: Callable[[Any], Any], field: str, value: Any) -> Any:
    try:
        return transform(value)
    except Exception as exc:
        raise QueryBuilderError.invalid_value(
            field, value, f"invalid value ({value}) for field {field!r}: {exc}"
        ) from exc
