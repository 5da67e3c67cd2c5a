"""Uniform success/error response envelope."""

from __future__ import annotations

from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from api_common.schemas.error import ErrorResponse

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Top-level API response envelope; exactly one of ``data``/``error`` is set.

    The error payload is stored as ``error_body`` and published as ``error``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    data: T | None = None
    error_body: ErrorResponse | None = Field(None, alias="error")

    @classmethod
    def ok(cls, data: T) -> ApiResponse[T]:
        """Wrap a successful payload."""
        return cls(success=True, data=data)

    @classmethod
    def error(cls, body: ErrorResponse) -> ApiResponse[Any]:
        """Wrap an error payload."""
        return cls(success=False, error_body=body)

    def to_content(self) -> dict[str, Any]:
        """Return the JSON-ready body with absent fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
