"""Server readiness and landing page caching for invocation handlers."""

from __future__ import annotations

import threading
from typing import Any
from typing import Callable
from typing import Optional
from typing import Protocol

from ow_graphql.api.schemas import LandingPage
from ow_graphql.utils.logging import get_logger

logger = get_logger(__name__)

# Marks a cache that has not been filled yet; None is a valid cached value
_UNCOMPUTED: Any = object()


class ServerLifecycle(Protocol):
    """Lifecycle operations an invocation handler needs from its server."""

    async def ensure_started(self) -> None:
        ...

    def get_landing_page(self) -> Optional[LandingPage]:
        ...


class LandingPageCache:
    """Tri-state, compute-once cache for the landing page.

    The states are uncomputed, computed-present and computed-absent. An
    absent landing page is cached like a present one and never recomputed.
    """

    def __init__(self) -> None:
        self._value: Any = _UNCOMPUTED
        self._lock = threading.Lock()

    @property
    def computed(self) -> bool:
        return self._value is not _UNCOMPUTED

    def get_or_compute(
        self,
        compute: Callable[[], Optional[LandingPage]],
    ) -> Optional[LandingPage]:
        """Return the cached landing page, computing it on first access."""
        value = self._value
        if value is not _UNCOMPUTED:
            return value

        with self._lock:
            if self._value is _UNCOMPUTED:
                self._value = compute()
                logger.debug(
                    "Landing page computed",
                    extra={"landing_page_available": self._value is not None},
                )
            return self._value


class LifecycleGate:
    """Runs at the start of every invocation before any classification."""

    def __init__(
        self,
        server: ServerLifecycle,
        cache: Optional[LandingPageCache] = None,
    ) -> None:
        self.server = server
        self.cache = cache or LandingPageCache()

    async def prepare(self) -> Optional[LandingPage]:
        """Ensure the server is started and return the cached landing page.

        Startup failures propagate to the caller.
        """
        await self.server.ensure_started()
        return self.cache.get_or_compute(self.server.get_landing_page)
