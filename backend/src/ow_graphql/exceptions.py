"""Custom exception classes for the GraphQL adapter.

This module provides adapter-specific exception classes that carry
HTTP status codes, response headers and structured error information.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional


class AdapterError(Exception):
    """Base exception for adapter errors.

    All adapter-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class HttpQueryError(AdapterError):
    """Raised by the execution engine when it rejects a request.

    Use for malformed GraphQL documents, validation failures, unsupported
    methods or any other rejection that maps onto an HTTP status.

    Attributes:
        headers: Response headers the engine wants on the reply.
        is_graphql_error: Whether ``message`` is a serialized GraphQL
            error payload rather than plain text.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        is_graphql_error: bool = False,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message, status_code=status_code)
        self.is_graphql_error = is_graphql_error
        self.headers: dict[str, Any] = dict(headers or {})

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        if self.is_graphql_error:
            result["is_graphql_error"] = True
        return result


class StartupError(AdapterError):
    """Raised when the GraphQL server cannot complete its startup.

    Once startup has failed, every later invocation raises this again.
    """

    def __init__(self, message: str = "GraphQL server failed to start"):
        super().__init__(message, status_code=500)


class ConfigurationError(AdapterError):
    """Raised when required configuration is missing or malformed.

    Use when environment variables or settings are not properly configured.
    """

    def __init__(self, config_name: str, detail: Optional[str] = None):
        super().__init__(
            f"Missing required configuration: {config_name}",
            status_code=500,
            detail=detail,
        )
        self.config_name = config_name
