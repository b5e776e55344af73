"""Invocation handler translating web action arguments into GraphQL queries.

This module provides the request-handling pipeline run once per
invocation: lifecycle gate, header normalization, classification, and
either a short-circuit reply or execution by the GraphQL engine.
"""

from __future__ import annotations

import time
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Union

from ow_graphql.api.classifier import RequestKind
from ow_graphql.api.classifier import build_landing_page_response
from ow_graphql.api.classifier import build_preflight_response
from ow_graphql.api.classifier import classify_request
from ow_graphql.api.execution import HttpQueryRunner
from ow_graphql.api.execution import execute
from ow_graphql.api.lifecycle import LandingPageCache
from ow_graphql.api.lifecycle import LifecycleGate
from ow_graphql.api.lifecycle import ServerLifecycle
from ow_graphql.api.schemas import HandlerOptions
from ow_graphql.api.schemas import InvocationRequest
from ow_graphql.api.schemas import InvocationResponse
from ow_graphql.utils.headers import normalize_headers
from ow_graphql.utils.logging import clear_request_context
from ow_graphql.utils.logging import get_logger
from ow_graphql.utils.logging import log_invocation
from ow_graphql.utils.logging import log_response
from ow_graphql.utils.logging import set_request_context

logger = get_logger(__name__)

OptionsFactory = Callable[[Mapping[str, Any]], Awaitable[Any]]


def coerce_options(
    options: Union[HandlerOptions, Mapping[str, Any], None],
) -> HandlerOptions:
    """Accept handler options as a model, a plain mapping or None."""
    if options is None:
        return HandlerOptions()
    if isinstance(options, HandlerOptions):
        return options
    return HandlerOptions.model_validate(dict(options))


class InvocationHandler:
    """Async callable handling one web action invocation per call.

    Args:
        server: Lifecycle collaborator (startup and landing page).
        runner: GraphQL execution engine.
        options_factory: Builds the engine options for a request.
        options: Static handler options such as outgoing headers.
    """

    def __init__(
        self,
        server: ServerLifecycle,
        runner: HttpQueryRunner,
        options_factory: OptionsFactory,
        options: Union[HandlerOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self.runner = runner
        self.options_factory = options_factory
        self.options = coerce_options(options)
        self.landing_page_cache = LandingPageCache()
        self.gate = LifecycleGate(server, self.landing_page_cache)

    async def __call__(
        self, args: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        started = time.perf_counter()
        args = dict(args or {})

        request = InvocationRequest.model_validate(args)
        request_headers = normalize_headers(request.headers)
        outgoing_headers = normalize_headers(self.options.headers)

        set_request_context(
            corr_id=request_headers.get("x-request-id")
            or request_headers.get("x-correlation-id")
        )
        try:
            landing_page = await self.gate.prepare()
            log_invocation(
                logger, request.method or "", request.path, request_headers
            )

            kind = classify_request(request.method, request_headers, landing_page)
            logger.debug("Invocation classified", extra={"kind": kind.value})

            response = await self._dispatch(
                kind, args, request, request_headers, outgoing_headers, landing_page
            )

            log_response(
                logger,
                response.status_code,
                kind.value,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            return response.to_dict()
        finally:
            clear_request_context()

    async def _dispatch(
        self,
        kind: RequestKind,
        args: Mapping[str, Any],
        request: InvocationRequest,
        request_headers: Mapping[str, Any],
        outgoing_headers: Mapping[str, Any],
        landing_page: Any,
    ) -> InvocationResponse:
        if kind is RequestKind.PREFLIGHT:
            return build_preflight_response(request_headers, outgoing_headers)

        if kind is RequestKind.LANDING_PAGE:
            return build_landing_page_response(landing_page, outgoing_headers)

        options = await self.options_factory(args)
        return await execute(
            self.runner,
            args,
            request,
            options,
            request_headers,
            outgoing_headers,
            mask_unexpected_errors=self.options.mask_unexpected_errors,
        )
