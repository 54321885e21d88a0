"""Filter, sort and group descriptors sent by clients."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FilterOperator(str, Enum):
    """Operators a filter descriptor may use."""

    # Comparison
    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"

    # String matching (case-insensitive)
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesnotcontain"

    # Null / empty checks
    IS_NULL = "isnull"
    IS_NOT_NULL = "isnotnull"
    IS_EMPTY = "isempty"
    IS_NOT_EMPTY = "isnotempty"


NULL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL}
)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Filter(BaseModel):
    """
    One filter condition.

    ``operator`` stays a plain string so an unknown operator is reported
    by the compiler together with the field it was used on.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    operator: str
    value: Any = None


class Sort(BaseModel):
    """One ordering entry; ``dir`` is ``asc`` or ``desc``."""

    model_config = ConfigDict(frozen=True)

    field: str
    dir: str = SortDirection.ASC.value


Order = Sort


class Group(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str


class FilteredResults(BaseModel):
    """Page of rows plus the total row count for the same filters."""

    data: list[dict[str, Any]]
    total: int
