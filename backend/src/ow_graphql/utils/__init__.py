"""Utility modules for the GraphQL adapter."""

from ow_graphql.utils.headers import (
    merge_headers,
    normalize_headers,
    redact_headers,
)
from ow_graphql.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "merge_headers",
    "normalize_headers",
    "redact_headers",
    "set_request_context",
]
