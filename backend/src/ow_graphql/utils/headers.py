"""Header normalization helpers.

Header names are case-insensitive on the wire, so every mapping that
crosses the adapter boundary is folded to lowercase keys first.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

# Headers whose values must never reach the logs
_SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "proxy-authorization",
        "x-api-key",
        "x-amz-security-token",
    }
)


def normalize_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Return a copy of ``headers`` with every name lower-cased.

    Values are passed through unchanged. When two names collide after
    lower-casing, the last one in iteration order wins.

    Args:
        headers: Header mapping, or None.

    Returns:
        A new dictionary keyed by lowercase header names.
    """
    if not headers:
        return {}
    return {str(key).lower(): value for key, value in headers.items()}


def merge_headers(*mappings: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Normalize and merge header mappings, later mappings winning."""
    merged: dict[str, Any] = {}
    for mapping in mappings:
        merged.update(normalize_headers(mapping))
    return merged


def redact_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Mask credential-bearing header values for safe logging.

    SECURITY: Authorization tokens, cookies and API keys are replaced
    with a fixed marker; everything else is kept for debugging.
    """
    return {
        key: "***" if key in _SENSITIVE_HEADERS else value
        for key, value in normalize_headers(headers).items()
    }
