"""
Error vocabulary for the query builder.

Every request-level failure is a ``QueryBuilderError`` tagged with an
``ErrorKind``.  Callers switch on ``exc.kind`` instead of catching a
family of exception classes::

    try:
        query, args = build_data_query(base, request, fields, config)
    except QueryBuilderError as exc:
        if exc.kind is ErrorKind.UNKNOWN_FIELD:
            ...

All errors provide ``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of query builder failure kinds."""

    UNKNOWN_FIELD = "unknown_field"
    OPERATION_NOT_ALLOWED = "operation_not_allowed"
    INVALID_OPERATOR = "invalid_operator"
    VALUE = "value"
    SLICE = "slice"
    DIR = "dir"
    DECODE = "decode"
    REBIND = "rebind"

    @property
    def is_client_error(self) -> bool:
        """``True`` when the kind is caused by request input."""
        return self is not ErrorKind.REBIND


class WebQueryError(Exception):
    """Root exception for the webutil-query package."""


class QueryBuilderError(WebQueryError):
    """
    A descriptor, value or placeholder problem found while building a query.

    Attributes:
        kind: What went wrong.
        field: Logical field (or request parameter) the error refers to.
        operation: Action that was attempted (``filter``, ``sort``, ``group``,
            or the operator name).
        value: Offending value, or the type name of the offending value.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        field: str | None = None,
        operation: str | None = None,
        value: Any = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.field = field
        self.operation = operation
        self.value = value
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return self.kind.is_client_error

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": self.kind.name,
            "message": self.message,
        }
        if self.field is not None:
            result["field"] = self.field
        if self.operation is not None:
            result["operation"] = self.operation
        if self.value is not None:
            result["value"] = self.value
        return result

    def __repr__(self) -> str:
        return (
            f"QueryBuilderError(kind={self.kind.name}, field={self.field!r}, "
            f"operation={self.operation!r}, value={self.value!r})"
        )

    # -- constructors --------------------------------------------------------

    @classmethod
    def unknown_field(cls, field: str) -> QueryBuilderError:
        return cls(ErrorKind.UNKNOWN_FIELD, f"invalid field: {field!r}", field=field)

    @classmethod
    def not_allowed(cls, field: str, operation: str) -> QueryBuilderError:
        return cls(
            ErrorKind.OPERATION_NOT_ALLOWED,
            f"invalid operation ({operation}) for field: {field!r}",
            field=field,
            operation=operation,
        )

    @classmethod
    def invalid_value(
        cls, field: str, value: Any, reason: str | None = None
    ) -> QueryBuilderError:
        message = reason or f"invalid value ({value}) for field {field!r}"
        return cls(ErrorKind.VALUE, message, field=field, value=value)

    @classmethod
    def invalid_slice(cls, field: str, type_name: str) -> QueryBuilderError:
        return cls(
            ErrorKind.SLICE,
            f"invalid type ({type_name}) within array for field: {field!r}",
            field=field,
            value=type_name,
        )

    @classmethod
    def invalid_dir(cls, field: str, direction: str) -> QueryBuilderError:
        return cls(
            ErrorKind.DIR,
            f"invalid sort dir ({direction}) for field {field!r}",
            field=field,
            value=direction,
        )

    @classmethod
    def decode(cls, param: str, detail: str) -> QueryBuilderError:
        return cls(
            ErrorKind.DECODE,
            f"invalid {param} parameter: {detail}",
            field=param,
        )

    @classmethod
    def rebind(cls, message: str) -> QueryBuilderError:
        return cls(ErrorKind.REBIND, message)
