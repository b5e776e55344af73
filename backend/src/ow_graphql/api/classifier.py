"""Request classification and short-circuit replies.

Every invocation ends up on exactly one of three paths: a CORS preflight
reply, a landing-page reply, or execution by the GraphQL engine.
"""

from __future__ import annotations

import enum
from typing import Any
from typing import Mapping
from typing import Optional

from ow_graphql.api.schemas import InvocationResponse
from ow_graphql.api.schemas import LandingPage
from ow_graphql.utils.headers import normalize_headers
from ow_graphql.utils.responses import invocation_response


class RequestKind(str, enum.Enum):
    """Reply path chosen for an invocation."""

    PREFLIGHT = "preflight"
    LANDING_PAGE = "landing_page"
    EXECUTE = "execute"


def classify_request(
    method: Optional[str],
    request_headers: Mapping[str, Any],
    landing_page: Optional[LandingPage],
) -> RequestKind:
    """Decide which reply path handles the request.

    Args:
        method: HTTP method of the invocation, any case.
        request_headers: Normalized (lowercase) request headers.
        landing_page: Cached landing page, or None when unavailable.

    Returns:
        The RequestKind to dispatch on.
    """
    normalized_method = (method or "").lower()

    if normalized_method == "options":
        return RequestKind.PREFLIGHT

    if (
        landing_page is not None
        and normalized_method == "get"
        and "text/html" in str(request_headers.get("accept") or "")
    ):
        return RequestKind.LANDING_PAGE

    return RequestKind.EXECUTE


def _append_vary(current: Any, name: str) -> str:
    """Add ``name`` to a Vary value unless it is already listed."""
    if not current:
        return name
    listed = [part.strip().lower() for part in str(current).split(",")]
    if name in listed or "*" in listed:
        return str(current)
    return f"{current}, {name}"


def build_preflight_response(
    request_headers: Mapping[str, Any],
    outgoing_headers: Mapping[str, Any],
) -> InvocationResponse:
    """Build the 204 reply to a CORS preflight request.

    Requested headers and methods are echoed back only when the
    configured outgoing headers do not already answer them.
    """
    headers = normalize_headers(outgoing_headers)

    requested_headers = request_headers.get("access-control-request-headers")
    if requested_headers and not headers.get("access-control-allow-headers"):
        headers["access-control-allow-headers"] = requested_headers
        headers["vary"] = _append_vary(
            headers.get("vary"), "access-control-request-headers"
        )

    requested_method = request_headers.get("access-control-request-method")
    if requested_method and not headers.get("access-control-allow-methods"):
        headers["access-control-allow-methods"] = requested_method

    return invocation_response(204, "", headers)


def build_landing_page_response(
    landing_page: LandingPage,
    outgoing_headers: Mapping[str, Any],
) -> InvocationResponse:
    """Build the 200 reply serving the landing page HTML."""
    return invocation_response(
        200,
        landing_page.html,
        {"content-type": "text/html"},
        outgoing_headers,
    )
