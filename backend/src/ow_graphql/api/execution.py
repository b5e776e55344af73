"""Delegation of invocations to the GraphQL execution engine.

The engine is an external collaborator implementing ``HttpQueryRunner``.
Its outcome is captured as one of three result variants which are then
mapped onto an invocation response.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Mapping
from typing import Optional
from typing import Protocol
from typing import Sequence
from typing import Union

from ow_graphql.api.schemas import InvocationRequest
from ow_graphql.api.schemas import InvocationResponse
from ow_graphql.exceptions import HttpQueryError
from ow_graphql.utils.headers import merge_headers
from ow_graphql.utils.logging import get_logger
from ow_graphql.utils.responses import bare_response
from ow_graphql.utils.responses import invocation_response

logger = get_logger(__name__)

POST_BODY_MISSING = "POST body missing."
MASKED_ERROR_BODY = "Internal server error"


@dataclass(frozen=True)
class HttpRequest:
    """HTTP-shaped description of the invocation handed to the engine."""

    url: str
    method: str
    headers: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HttpQueryRequest:
    """Everything the engine needs to run one query."""

    method: str
    options: Any
    query: Mapping[str, Any]
    request: HttpRequest


@dataclass(frozen=True)
class ResponseInit:
    """Status and headers the engine wants on the reply."""

    status: Optional[int] = None
    headers: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HttpQueryResponse:
    """Successful engine output."""

    graphql_response: Any
    response_init: ResponseInit = field(default_factory=ResponseInit)


class HttpQueryRunner(Protocol):
    """Interface of the external GraphQL execution engine."""

    async def __call__(
        self,
        handler_arguments: Sequence[Any],
        request: HttpQueryRequest,
    ) -> HttpQueryResponse:
        ...


@dataclass(frozen=True)
class QuerySucceeded:
    body: Any
    status: Optional[int]
    headers: dict[str, Any]


@dataclass(frozen=True)
class QueryRejected:
    error: HttpQueryError


@dataclass(frozen=True)
class QueryCrashed:
    raw: Any


ExecutionResult = Union[QuerySucceeded, QueryRejected, QueryCrashed]


def build_query_request(
    args: Mapping[str, Any],
    request: InvocationRequest,
    options: Any,
    request_headers: Mapping[str, Any],
    outgoing_headers: Mapping[str, Any],
) -> HttpQueryRequest:
    """Shape an invocation as an HTTP query for the engine.

    The raw arguments are passed as the query payload since body, path
    and query string are all embedded in them.
    """
    method = (request.method or "").upper()
    return HttpQueryRequest(
        method=method,
        options=options,
        query=args,
        request=HttpRequest(
            url=request.path or "",
            method=method,
            headers=merge_headers(request_headers, outgoing_headers),
        ),
    )


async def run_query(
    runner: HttpQueryRunner,
    args: Mapping[str, Any],
    query_request: HttpQueryRequest,
) -> ExecutionResult:
    """Run a query and capture its outcome as a result variant."""
    try:
        response = await runner([args], query_request)
    except HttpQueryError as exc:
        return QueryRejected(error=exc)
    except Exception as exc:
        logger.exception("Unexpected error while executing GraphQL query")
        return QueryCrashed(raw=exc)

    return QuerySucceeded(
        body=response.graphql_response,
        status=response.response_init.status,
        headers=dict(response.response_init.headers or {}),
    )


def to_invocation_response(
    result: ExecutionResult,
    outgoing_headers: Mapping[str, Any],
    mask_unexpected_errors: bool = False,
) -> InvocationResponse:
    """Map an execution result onto the invocation envelope.

    Args:
        result: Outcome of ``run_query``.
        outgoing_headers: Statically configured response headers; they
            win over engine and error headers.
        mask_unexpected_errors: Replace the raw error of an unexpected
            failure with a generic message.

    Returns:
        The InvocationResponse for the invocation.
    """
    if isinstance(result, QuerySucceeded):
        return invocation_response(
            result.status or 200,
            result.body,
            result.headers,
            outgoing_headers,
        )

    if isinstance(result, QueryRejected):
        logger.warning(
            f"GraphQL query rejected: {result.error.message}",
            extra={"status_code": result.error.status_code},
        )
        return invocation_response(
            result.error.status_code,
            {"error": result.error},
            result.error.headers,
            outgoing_headers,
        )

    if isinstance(result, QueryCrashed):
        body = MASKED_ERROR_BODY if mask_unexpected_errors else result.raw
        return bare_response(400, body)

    raise TypeError(f"Unknown execution result: {result!r}")


def missing_body_response(
    outgoing_headers: Mapping[str, Any],
) -> InvocationResponse:
    """Reply to a POST invocation that carries no payload."""
    if outgoing_headers:
        return invocation_response(400, POST_BODY_MISSING, outgoing_headers)
    return bare_response(400, POST_BODY_MISSING)


async def execute(
    runner: HttpQueryRunner,
    args: Mapping[str, Any],
    request: InvocationRequest,
    options: Any,
    request_headers: Mapping[str, Any],
    outgoing_headers: Mapping[str, Any],
    mask_unexpected_errors: bool = False,
) -> InvocationResponse:
    """Execute an invocation against the engine and shape the reply."""
    if (request.method or "").upper() == "POST" and not request.has_payload():
        return missing_body_response(outgoing_headers)

    query_request = build_query_request(
        args, request, options, request_headers, outgoing_headers
    )
    result = await run_query(runner, args, query_request)
    return to_invocation_response(result, outgoing_headers, mask_unexpected_errors)
