"""Filter, sort, group and paging SQL builder for list endpoints."""

from __future__ import annotations

from .builder import SelectBuilder, count_select
from .compiler import CompiledColumns, CompiledFilters, PredicateCompiler, ValueTag
from .config import BindType, QueryConfig
from .decoder import (
    FormRequest,
    MappingFormRequest,
    decode_filters,
    decode_groups,
    decode_sorts,
)
from .descriptors import (
    Filter,
    FilteredResults,
    FilterOperator,
    Group,
    Order,
    Sort,
    SortDirection,
)
from .exceptions import ErrorKind, QueryBuilderError, WebQueryError
from .executor import query_count_result, query_data_and_count, query_data_result
from .fields import FieldConfig, FieldRegistry
from .query import build_count_query, build_data_query
from .rebind import expand_in, in_query_rebind, rebind
from .responses import error_response, status_for_error

__all__ = [
    # Entry points
    "build_data_query",
    "build_count_query",
    # Fields and config
    "FieldConfig",
    "FieldRegistry",
    "QueryConfig",
    "BindType",
    # Descriptors
    "Filter",
    "FilterOperator",
    "Sort",
    "Order",
    "SortDirection",
    "Group",
    "FilteredResults",
    # Request decoding
    "FormRequest",
    "MappingFormRequest",
    "decode_filters",
    "decode_sorts",
    "decode_groups",
    # Building blocks
    "PredicateCompiler",
    "CompiledFilters",
    "CompiledColumns",
    "ValueTag",
    "SelectBuilder",
    "count_select",
    "expand_in",
    "rebind",
    "in_query_rebind",
    # Execution
    "query_data_result",
    "query_count_result",
    "query_data_and_count",
    # Errors
    "ErrorKind",
    "QueryBuilderError",
    "WebQueryError",
    "error_response",
    "status_for_error",
]
