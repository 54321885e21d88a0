"""Decode JSON-encoded descriptor arrays from request parameters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, TypeVar, runtime_checkable
from urllib.parse import parse_qs, unquote

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .descriptors import Filter, Group, Sort
from .exceptions import QueryBuilderError

T = TypeVar("T")


@runtime_checkable
class FormRequest(Protocol):
    """Anything that can return a request parameter by name.

    Must return ``""`` when the parameter is absent.
    """

    def form_value(self, name: str) -> str: ...


class MappingFormRequest:
    """``FormRequest`` over a plain mapping (e.g. framework query params)."""

    def __init__(self, params: Mapping[str, str | Sequence[str]] | None = None) -> None:
        self._params: Mapping[str, str | Sequence[str]] = params or {}

    @classmethod
    def from_query_string(cls, query_string: str) -> MappingFormRequest:
        return cls(parse_qs(query_string, keep_blank_values=True))

    def form_value(self, name: str) -> str:
        raw = self._params.get(name)
        if raw is None:
            return ""
        if isinstance(raw, str):
            return raw
        return raw[0] if raw else ""


_FILTERS: TypeAdapter[list[Filter]] = TypeAdapter(list[Filter])
_SORTS: TypeAdapter[list[Sort]] = TypeAdapter(list[Sort])
_GROUPS: TypeAdapter[list[Group]] = TypeAdapter(list[Group])


def decode_filters(request: FormRequest, param: str) -> list[Filter]:
    return _decode(request, param, _FILTERS)


def decode_sorts(request: FormRequest, param: str) -> list[Sort]:
    return _decode(request, param, _SORTS)


def decode_groups(request: FormRequest, param: str) -> list[Group]:
    return _decode(request, param, _GROUPS)


def _decode(request: FormRequest, param: str, adapter: TypeAdapter[list[T]]) -> list[T]:
    """
    Read *param* from *request*, URL-decode it and validate the JSON array.

    An absent or empty parameter yields ``[]``.

    Raises:
        QueryBuilderError: ``DECODE`` when the value is not a JSON array of
            well-formed descriptors.
    """
    raw = request.form_value(param)
    if not raw:
        return []
    try:
        return adapter.validate_json(unquote(raw))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise QueryBuilderError.decode(param, first["msg"]) from exc
