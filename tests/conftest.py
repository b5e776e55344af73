"""Pytest configuration and fixtures for adapter tests.

This module provides stub collaborators (server lifecycle, execution
engine, options factory) and sample web action arguments.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from typing import Callable
from typing import Optional
from unittest.mock import AsyncMock

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


LANDING_PAGE_HTML = '<!DOCTYPE html><html><body>GraphQL</body></html>'


class StubServer:
    """Lifecycle collaborator counting the calls it receives."""

    def __init__(self, landing_page: Any = None) -> None:
        self.landing_page = landing_page
        self.landing_page_calls = 0
        self.ensure_started_calls = 0

    async def ensure_started(self) -> None:
        self.ensure_started_calls += 1

    def get_landing_page(self) -> Any:
        self.landing_page_calls += 1
        return self.landing_page


# --- Collaborator Fixtures ---


@pytest.fixture
def landing_page():
    """Landing page document served to browsers."""
    from ow_graphql.api.schemas import LandingPage

    return LandingPage(html=LANDING_PAGE_HTML)


@pytest.fixture
def stub_server() -> StubServer:
    """Server without a landing page."""
    return StubServer()


@pytest.fixture
def landing_server(landing_page) -> StubServer:
    """Server exposing a landing page."""
    return StubServer(landing_page=landing_page)


@pytest.fixture
def runner() -> AsyncMock:
    """Execution engine returning a plain successful response."""
    from ow_graphql.api.execution import HttpQueryResponse
    from ow_graphql.api.execution import ResponseInit

    return AsyncMock(
        return_value=HttpQueryResponse(
            graphql_response='{"data":{"hello":"world"}}',
            response_init=ResponseInit(
                headers={'Content-Type': 'application/json'},
            ),
        )
    )


@pytest.fixture
def options_factory() -> AsyncMock:
    """Options factory returning a fixed options mapping."""
    return AsyncMock(return_value={'schema': 'stub-schema', 'context': {}})


@pytest.fixture
def make_handler(stub_server, runner, options_factory) -> Callable[..., Any]:
    """Factory building an InvocationHandler around the stubs."""
    from ow_graphql.api.handler import InvocationHandler

    def _make(
        headers: Optional[dict[str, Any]] = None,
        server: Optional[StubServer] = None,
        **options: Any,
    ) -> InvocationHandler:
        return InvocationHandler(
            server=server or stub_server,
            runner=runner,
            options_factory=options_factory,
            options={'headers': headers or {}, **options},
        )

    return _make


# --- Web Action Argument Fixtures ---


@pytest.fixture
def post_args() -> dict:
    """POST invocation with a JSON body merged into the arguments."""
    return {
        '__ow_method': 'post',
        '__ow_path': '/graphql',
        '__ow_headers': {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        },
        'query': '{ hello }',
    }


@pytest.fixture
def browser_get_args() -> dict:
    """GET invocation issued by a browser navigating to the endpoint."""
    return {
        '__ow_method': 'get',
        '__ow_path': '/graphql',
        '__ow_headers': {
            'Accept': 'text/html,application/xhtml+xml,*/*;q=0.8',
        },
    }


@pytest.fixture
def preflight_args() -> dict:
    """CORS preflight invocation."""
    return {
        '__ow_method': 'options',
        '__ow_path': '/graphql',
        '__ow_headers': {
            'Origin': 'https://app.example.com',
            'Access-Control-Request-Headers': 'content-type,authorization',
            'Access-Control-Request-Method': 'POST',
        },
    }
