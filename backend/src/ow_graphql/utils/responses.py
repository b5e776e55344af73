"""Shared response utilities for invocation handlers."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from ow_graphql.api.schemas import InvocationResponse
from ow_graphql.utils.headers import merge_headers


def invocation_response(
    status_code: int,
    body: Any,
    headers: Optional[Mapping[str, Any]] = None,
    outgoing_headers: Optional[Mapping[str, Any]] = None,
) -> InvocationResponse:
    """Create an invocation response.

    ``headers`` and ``outgoing_headers`` are normalized and merged with
    the configured outgoing headers taking precedence on collision.

    Args:
        status_code: HTTP status code.
        body: Response body, passed through unchanged.
        headers: Headers produced by the reply path.
        outgoing_headers: Statically configured response headers.

    Returns:
        An immutable InvocationResponse.
    """
    return InvocationResponse(
        body=body,
        status_code=status_code,
        headers=merge_headers(headers, outgoing_headers),
    )


def bare_response(status_code: int, body: Any) -> InvocationResponse:
    """Create a response that carries no headers at all."""
    return InvocationResponse(body=body, status_code=status_code)
