"""Web action entrypoint for the GraphQL endpoint."""

from __future__ import annotations

import asyncio
from typing import Any
from typing import Mapping
from typing import Optional

from ow_graphql.api.handler import InvocationHandler
from ow_graphql.config import load_handler_options
from ow_graphql.config import load_server
from ow_graphql.utils.logging import configure_logging

# Configure logging on module load
configure_logging()

# Kept across warm invocations of the same container
_loop: Optional[asyncio.AbstractEventLoop] = None
_handler: Optional[InvocationHandler] = None


def get_handler() -> InvocationHandler:
    """Build the invocation handler on first use."""
    global _handler

    if _handler is None:
        server = load_server()
        _handler = server.create_handler(load_handler_options())
    return _handler


def main(args: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Delegate to the GraphQL invocation handler."""
    global _loop

    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop.run_until_complete(get_handler()(args))
