"""Pydantic schemas for the invocation envelope and handler options."""

from __future__ import annotations

from typing import Any
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# Parameters OpenWhisk adds to every web action invocation
ENVELOPE_FIELDS = frozenset(
    {
        "__ow_headers",
        "__ow_path",
        "__ow_method",
        "__ow_body",
        "__ow_query",
        "__ow_user",
    }
)


class InvocationRequest(BaseModel):
    """Inbound web action arguments.

    Extra top-level parameters are kept: OpenWhisk merges JSON request
    bodies and default action parameters into the argument object.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    headers: Optional[dict[str, Any]] = Field(default=None, alias="__ow_headers")
    path: Optional[str] = Field(default=None, alias="__ow_path")
    method: Optional[str] = Field(default=None, alias="__ow_method")
    body: Any = Field(default=None, alias="__ow_body")
    query: Optional[str] = Field(default=None, alias="__ow_query")

    @property
    def parameters(self) -> dict[str, Any]:
        """Top-level parameters that are not part of the envelope."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in ENVELOPE_FIELDS
        }

    def has_payload(self) -> bool:
        """Whether the invocation carries anything a query can come from."""
        if self.body not in (None, ""):
            return True
        return bool(self.parameters)


class InvocationResponse(BaseModel):
    """Outbound web action result."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    body: Any = None
    status_code: int = Field(alias="statusCode")
    headers: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the shape the invocation runtime relays.

        ``headers`` is omitted entirely when unset. The body is returned
        as-is so engine payloads and error objects are not re-encoded.
        """
        result: dict[str, Any] = {
            "body": self.body,
            "statusCode": self.status_code,
        }
        if self.headers is not None:
            result["headers"] = dict(self.headers)
        return result


class HandlerOptions(BaseModel):
    """Options accepted when creating an invocation handler."""

    model_config = ConfigDict(frozen=True)

    headers: dict[str, Any] = Field(default_factory=dict)
    mask_unexpected_errors: bool = False


class LandingPage(BaseModel):
    """HTML document served to browsers opening the endpoint directly."""

    model_config = ConfigDict(frozen=True)

    html: str
