"""Shared fixtures for webutil-query tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from webutil_query import FieldConfig, FieldRegistry, MappingFormRequest


def make_request(
    *,
    filters: list[dict[str, Any]] | None = None,
    sorts: list[dict[str, Any]] | None = None,
    groups: list[dict[str, Any]] | None = None,
    **params: str,
) -> MappingFormRequest:
    """Request with JSON-encoded descriptor arrays under the default names."""
    values: dict[str, str] = dict(params)
    if filters is not None:
        values["filters"] = json.dumps(filters)
    if sorts is not None:
        values["sorts"] = json.dumps(sorts)
    if groups is not None:
        values["groups"] = json.dumps(groups)
    return MappingFormRequest(values)


@pytest.fixture
def fields() -> FieldRegistry:
    """Users resource: name/status/age are fully enabled, email filter-only."""
    return FieldRegistry(
        {
            "name": FieldConfig(
                "u.name", allow_filter=True, allow_sort=True, allow_group=True
            ),
            "status": FieldConfig(
                "u.status", allow_filter=True, allow_sort=True, allow_group=True
            ),
            "age": FieldConfig(
                "u.age", allow_filter=True, allow_sort=True, allow_group=True
            ),
            "id": FieldConfig("u.id", allow_filter=True, allow_sort=True),
            "email": FieldConfig("u.email", allow_filter=True),
            "secret": FieldConfig("u.secret"),
        }
    )


@pytest.fixture
def form() -> Callable[..., MappingFormRequest]:
    """Factory for requests built by ``make_request``."""
    return make_request
