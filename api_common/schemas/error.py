"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from api_common.core.error_codes import ErrorCode


class ValidationFieldError(BaseModel):
    """Single field-level validation issue."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Canonical error payload object.

    ``errors`` stays ``None`` unless at least one field issue exists, so that
    ``exclude_none`` serialization omits it instead of emitting an empty list.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    status_code: int
    code: str
    message: str
    errors: list[ValidationFieldError] | None = None

    @classmethod
    def of(cls, error_code: ErrorCode, errors: Sequence[ValidationFieldError] | None = None) -> ErrorResponse:
        """Build the payload for ``error_code`` with optional field issues."""
        return cls(
            status_code=error_code.http_status,
            code=error_code.code,
            message=error_code.message,
            errors=list(errors) if errors else None,
        )
