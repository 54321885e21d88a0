"""Translate build/execution errors into HTTP status codes and payloads."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from .exceptions import QueryBuilderError

SERVER_ERROR_PAYLOAD: dict[str, Any] = {
    "error": "SERVER_ERROR",
    "message": "server error, please try again later",
}


def status_for_error(
    exc: BaseException,
    *,
    client_status: int = HTTPStatus.NOT_ACCEPTABLE,
    server_status: int = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> int:
    """
    Status code for *exc*.

    Client-caused ``QueryBuilderError`` kinds map to *client_status*;
    ``REBIND`` errors and any other exception map to *server_status*.
    """
    if isinstance(exc, QueryBuilderError) and exc.is_client_error:
        return int(client_status)
    return int(server_status)


def error_response(
    exc: BaseException,
    *,
    client_status: int = HTTPStatus.NOT_ACCEPTABLE,
    server_status: int = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> tuple[int, dict[str, Any]]:
    """``(status, payload)`` for *exc*; server errors get a generic payload."""
    status = status_for_error(
        exc, client_status=client_status, server_status=server_status
    )
    if isinstance(exc, QueryBuilderError) and exc.is_client_error:
        return status, exc.to_dict()
    return status, dict(SERVER_ERROR_PAYLOAD)
