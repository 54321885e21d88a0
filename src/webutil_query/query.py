"""
Build list and count queries from request descriptors.

``build_data_query`` and ``build_count_query`` are the two entry points.
Both are pure: they read the request, validate every descriptor against
the ``FieldRegistry``, and return ``(query, args)`` ready for a driver.
The first problem raises ``QueryBuilderError``; nothing is half-applied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .builder import SelectBuilder
from .compiler import PredicateCompiler
from .config import QueryConfig
from .decoder import decode_filters, decode_groups, decode_sorts
from .exceptions import QueryBuilderError
from .rebind import in_query_rebind

if TYPE_CHECKING:
    from .decoder import FormRequest
    from .descriptors import Sort
    from .fields import FieldRegistry

logger = logging.getLogger("webutil_query.query")


def build_data_query(
    base: str,
    request: FormRequest,
    fields: FieldRegistry,
    config: QueryConfig | None = None,
) -> tuple[str, list[Any]]:
    """
    Append filters, groups, sorts and paging from *request* to *base*.

    Args:
        base: SELECT without the clauses to be added; may already contain
            WHERE / GROUP BY / ORDER BY, which are then continued.
        request: Source of the descriptor and paging parameters.
        fields: Logical fields the client may use.
        config: Parameter names, caps, dialect and server descriptors.

    Returns:
        The final query in ``config.bind_type`` syntax and its arguments.

    Raises:
        QueryBuilderError: on the first invalid descriptor, value or
            placeholder mismatch.
    """
    return _build(base, request, fields, config or QueryConfig(), paged=True)


def build_count_query(
    base: str,
    request: FormRequest,
    fields: FieldRegistry,
    config: QueryConfig | None = None,
) -> tuple[str, list[Any]]:
    """Like ``build_data_query`` without ORDER BY and LIMIT/OFFSET."""
    return _build(base, request, fields, config or QueryConfig(), paged=False)


def _build(
    base: str,
    request: FormRequest,
    fields: FieldRegistry,
    config: QueryConfig,
    *,
    paged: bool,
) -> tuple[str, list[Any]]:
    compiler = PredicateCompiler(fields)
    builder = SelectBuilder(base)

    filters = list(config.prepend_filters)
    if not config.exclude_filters:
        filters.extend(decode_filters(request, config.filter_param))
    compiled = compiler.compile_filters(filters)
    builder.where(compiled.sql, *compiled.args)

    groups = list(config.prepend_groups)
    if not config.exclude_groups:
        groups.extend(decode_groups(request, config.group_param))
    grouped = compiler.compile_groups(
        groups, multi_column=config.can_multi_column_group
    )
    builder.group_by(grouped.sql)

    reconcile = bool(grouped.fields) and not config.disable_group_reconciliation
    sorts = _effective_sorts(request, config) if paged or reconcile else []
    if reconcile and sorts:
        # every sort field is grouped and permission-checked, rendered or not
        builder.group_by(compiler.reconcile_groups(grouped.fields, sorts).sql)

    if paged:
        ordered = compiler.compile_sorts(
            sorts, multi_column=config.can_multi_column_order
        )
        builder.order_by(ordered.sql)
        if not config.exclude_limit_offset:
            builder.limit_offset(*_limit_offset(request, config))

    query, args = builder.render()
    query, args = in_query_rebind(config.bind_type, query, *args)
    logger.debug("Built query: %s args=%r", query, args)
    return query, args


def _effective_sorts(request: FormRequest, config: QueryConfig) -> list[Sort]:
    sorts = list(config.prepend_sorts)
    client: list[Sort] = []
    if not config.exclude_sorts:
        client = decode_sorts(request, config.order_param)
    sorts.extend(client or config.default_sorts)
    return sorts


def _limit_offset(request: FormRequest, config: QueryConfig) -> tuple[int, int]:
    """Requested limit/offset, defaulted and clamped to the configured caps."""
    limit = _non_negative_int(request, config.limit_param, config.limit)
    offset = _non_negative_int(request, config.offset_param, 0)
    limit = min(limit, config.limit)
    if config.offset > 0:
        offset = min(offset, config.offset)
    return limit, offset


def _non_negative_int(request: FormRequest, param: str, default: int) -> int:
    raw = request.form_value(param)
    if not raw:
        return default
    if not (raw.isascii() and raw.isdigit()):
        raise QueryBuilderError.decode(
            param, f"{raw!r} is not a non-negative integer"
        )
    return int(raw)
