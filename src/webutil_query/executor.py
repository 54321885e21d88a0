"""
Run built list/count queries on a SQLAlchemy ``AsyncConnection``.

The rebound text is handed to the DBAPI driver verbatim through
``exec_driver_sql``, so ``QueryConfig.bind_type`` must match the driver's
paramstyle.  ``BindType.for_paramstyle(conn.dialect.paramstyle)`` picks it
and rejects drivers whose style the rebinder cannot produce.  ``NAMED``
arguments are passed as an ``{"arg1": ...}`` mapping, all others as a tuple.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import BindType
from .descriptors import FilteredResults
from .query import build_count_query, build_data_query

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.ext.asyncio import AsyncConnection

    from .config import QueryConfig
    from .decoder import FormRequest
    from .fields import FieldRegistry

logger = logging.getLogger("webutil_query.executor")


async def query_data_result(
    conn: AsyncConnection,
    base: str,
    request: FormRequest,
    fields: FieldRegistry,
    config: QueryConfig | None = None,
    *,
    row_hook: Callable[[dict[str, Any]], None] | None = None,
) -> list[dict[str, Any]]:
    """
    Build the data query and return its rows as dicts.

    Args:
        row_hook: Called with every row before it is returned; may mutate
            the row in place or raise to abort.
    """
    query, args = build_data_query(base, request, fields, config)
    result = await _execute(conn, query, args, config)
    rows: list[dict[str, Any]] = []
    for mapping in result.mappings():
        row = dict(mapping)
        if row_hook is not None:
            row_hook(row)
        rows.append(row)
    return rows


async def query_count_result(
    conn: AsyncConnection,
    base: str,
    request: FormRequest,
    fields: FieldRegistry,
    config: QueryConfig | None = None,
) -> int:
    """Build the count query and return the sum of its first column (0 if empty)."""
    query, args = build_count_query(base, request, fields, config)
    result = await _execute(conn, query, args, config)
    return sum(int(row[0] or 0) for row in result)


async def query_data_and_count(
    conn: AsyncConnection,
    data_base: str,
    count_base: str,
    request: FormRequest,
    fields: FieldRegistry,
    data_config: QueryConfig | None = None,
    count_config: QueryConfig | None = None,
) -> FilteredResults:
    """Run the data query, then the count query with the same filters."""
    data = await query_data_result(conn, data_base, request, fields, data_config)
    total = await query_count_result(
        conn, count_base, request, fields, count_config or data_config
    )
    return FilteredResults(data=data, total=total)


async def _execute(
    conn: AsyncConnection,
    query: str,
    args: list[Any],
    config: QueryConfig | None,
) -> CursorResult[Any]:
    logger.debug("Executing query: %s args=%r", query, args)
    try:
        return await conn.exec_driver_sql(query, _driver_params(args, config))
    except Exception:
        logger.exception("Query failed: %s args=%r", query, args)
        raise


def _driver_params(
    args: list[Any], config: QueryConfig | None
) -> tuple[Any, ...] | dict[str, Any]:
    if config is not None and config.bind_type is BindType.NAMED:
        return {f"arg{number}": arg for number, arg in enumerate(args, start=1)}
    return tuple(args)
