"""Base GraphQL server lifecycle.

This module provides startup sequencing, landing page resolution and
per-request option building shared by integration-specific servers.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Union

from ow_graphql.api.execution import HttpQueryRunner
from ow_graphql.api.schemas import LandingPage
from ow_graphql.exceptions import StartupError
from ow_graphql.utils.logging import get_logger

logger = get_logger(__name__)

LandingPageSource = Union[LandingPage, str, Callable[[], Optional[LandingPage]], None]
ContextFactory = Callable[[Mapping[str, Any]], Union[Any, Awaitable[Any]]]


class GraphQLServerBase:
    """Lifecycle collaborator wrapping a GraphQL execution engine.

    Args:
        runner: Engine that executes HTTP-shaped GraphQL queries.
        landing_page: A LandingPage, raw HTML, a zero-argument callable
            returning either, or None to disable the landing page.
        options: Static engine options (schema, validation rules, ...)
            copied into every per-request options mapping.
        context: Optional factory building the resolver context from the
            integration context; may be async.
    """

    def __init__(
        self,
        runner: HttpQueryRunner,
        landing_page: LandingPageSource = None,
        options: Optional[Mapping[str, Any]] = None,
        context: Optional[ContextFactory] = None,
    ) -> None:
        self.runner = runner
        self._landing_page = landing_page
        self._options = dict(options or {})
        self._context = context
        self._started = False
        self._startup_error: Optional[BaseException] = None
        self._startup_lock: Optional[asyncio.Lock] = None

    def serverless_framework(self) -> bool:
        """Whether the server runs without a long-lived listener."""
        return False

    async def _startup(self) -> None:
        """Startup hook run exactly once; override to load schemas etc."""

    async def ensure_started(self) -> None:
        """Run startup once; later calls return immediately.

        A failed startup is remembered and re-raised as StartupError on
        every later call.

        Raises:
            StartupError: If startup failed now or on an earlier call.
        """
        if self._started:
            return
        self._raise_if_failed()

        if self._startup_lock is None:
            self._startup_lock = asyncio.Lock()

        async with self._startup_lock:
            if self._started:
                return
            self._raise_if_failed()
            try:
                await self._startup()
            except Exception as exc:
                self._startup_error = exc
                logger.exception("GraphQL server startup failed")
                raise StartupError(
                    f"GraphQL server failed to start: {exc}"
                ) from exc
            self._started = True
            logger.info(
                "GraphQL server started",
                extra={"serverless": self.serverless_framework()},
            )

    def _raise_if_failed(self) -> None:
        if self._startup_error is not None:
            raise StartupError(
                f"GraphQL server failed to start: {self._startup_error}"
            ) from self._startup_error

    def get_landing_page(self) -> Optional[LandingPage]:
        """Resolve the configured landing page, or None when disabled."""
        source = self._landing_page
        if callable(source):
            source = source()
        if source is None:
            return None
        if isinstance(source, str):
            return LandingPage(html=source)
        return source

    async def graphql_server_options(
        self,
        integration_context: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Build engine options for one request.

        Args:
            integration_context: Integration-specific request data.

        Returns:
            The static options plus the resolver ``context``.
        """
        context: Any = dict(integration_context)
        if self._context is not None:
            context = self._context(integration_context)
            if inspect.isawaitable(context):
                context = await context

        options = dict(self._options)
        options["context"] = context
        return options
