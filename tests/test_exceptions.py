"""Tests for QueryBuilderError and ErrorKind."""

from __future__ import annotations

import pytest

from webutil_query import ErrorKind, QueryBuilderError, WebQueryError


def test_query_builder_error_is_package_error() -> None:
    exc = QueryBuilderError.unknown_field("nope")
    assert isinstance(exc, WebQueryError)
    assert exc.kind is ErrorKind.UNKNOWN_FIELD
    assert str(exc) == "invalid field: 'nope'"


@pytest.mark.parametrize("kind", [k for k in ErrorKind if k is not ErrorKind.REBIND])
def test_request_kinds_are_client_errors(kind: ErrorKind) -> None:
    assert kind.is_client_error
    assert QueryBuilderError(kind, "x").is_client_error


def test_rebind_is_server_error() -> None:
    exc = QueryBuilderError.rebind("empty list passed to 'in' query")
    assert not ErrorKind.REBIND.is_client_error
    assert not exc.is_client_error


def test_not_allowed_message_and_fields() -> None:
    exc = QueryBuilderError.not_allowed("email", "sort")
    assert exc.kind is ErrorKind.OPERATION_NOT_ALLOWED
    assert exc.message == "invalid operation (sort) for field: 'email'"
    assert exc.field == "email"
    assert exc.operation == "sort"


def test_to_dict_omits_unset_attributes() -> None:
    exc = QueryBuilderError.invalid_dir("name", "sideways")
    assert exc.to_dict() == {
        "error": "DIR",
        "message": "invalid sort dir (sideways) for field 'name'",
        "field": "name",
        "value": "sideways",
    }
    assert QueryBuilderError.rebind("boom").to_dict() == {
        "error": "REBIND",
        "message": "boom",
    }


def test_slice_error_carries_type_name() -> None:
    exc = QueryBuilderError.invalid_slice("age", "dict")
    assert exc.kind is ErrorKind.SLICE
    assert exc.value == "dict"
    assert "dict" in exc.message


def test_decode_error_names_parameter() -> None:
    exc = QueryBuilderError.decode("filters", "Invalid JSON")
    assert exc.message == "invalid filters parameter: Invalid JSON"
    assert exc.field == "filters"


def test_repr_includes_kind() -> None:
    assert "kind=VALUE" in repr(QueryBuilderError.invalid_value("age", "x"))
