"""Environment-driven configuration for the web action entrypoint."""

from __future__ import annotations

import importlib
import json
import os
from typing import Any
from typing import Optional

from ow_graphql.api.schemas import HandlerOptions
from ow_graphql.exceptions import ConfigurationError
from ow_graphql.server.openwhisk import OpenWhiskGraphQLServer

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def load_response_headers() -> dict[str, Any]:
    """Read static outgoing headers from the environment.

    ``GRAPHQL_RESPONSE_HEADERS`` holds a JSON object of headers;
    ``GRAPHQL_CORS_ALLOWED_ORIGIN`` adds ``access-control-allow-origin``
    unless the JSON object already sets it.

    Raises:
        ConfigurationError: If the JSON is malformed or not an object.
    """
    headers: dict[str, Any] = {}

    raw = os.getenv("GRAPHQL_RESPONSE_HEADERS", "").strip()
    if raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                "GRAPHQL_RESPONSE_HEADERS", detail=f"Invalid JSON: {exc}"
            ) from exc
        if not isinstance(parsed, dict):
            raise ConfigurationError(
                "GRAPHQL_RESPONSE_HEADERS", detail="Expected a JSON object"
            )
        headers.update({str(key).lower(): value for key, value in parsed.items()})

    origin = os.getenv("GRAPHQL_CORS_ALLOWED_ORIGIN", "").strip()
    if origin:
        headers.setdefault("access-control-allow-origin", origin)

    return headers


def load_handler_options() -> HandlerOptions:
    """Build handler options from the environment."""
    return HandlerOptions(
        headers=load_response_headers(),
        mask_unexpected_errors=_env_flag("GRAPHQL_MASK_UNEXPECTED_ERRORS"),
    )


def load_server(factory_path: Optional[str] = None) -> OpenWhiskGraphQLServer:
    """Import and call the configured server factory.

    Args:
        factory_path: ``module:attribute`` path; defaults to the
            ``GRAPHQL_SERVER_FACTORY`` environment variable.

    Raises:
        ConfigurationError: If the path is missing, malformed, cannot be
            imported, or the factory does not return a server.
    """
    path = factory_path or os.getenv("GRAPHQL_SERVER_FACTORY", "")
    if not path:
        raise ConfigurationError("GRAPHQL_SERVER_FACTORY")

    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(
            "GRAPHQL_SERVER_FACTORY", detail=f"Expected module:attribute, got {path}"
        )

    try:
        factory = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            "GRAPHQL_SERVER_FACTORY", detail=f"Cannot load {path}: {exc}"
        ) from exc

    if not callable(factory):
        raise ConfigurationError(
            "GRAPHQL_SERVER_FACTORY", detail=f"{path} is not callable"
        )

    server = factory()
    if not isinstance(server, OpenWhiskGraphQLServer):
        raise ConfigurationError(
            "GRAPHQL_SERVER_FACTORY",
            detail=f"{path} returned {type(server).__name__}, not a server",
        )
    return server
