"""Exception types business code raises to signal classified failures."""

from __future__ import annotations

from api_common.core.error_codes import ErrorCode


class BusinessError(Exception):
    """Expected, business-rule failure carrying exactly one error code.

    Raise it where the rule is violated and let it propagate unchanged to the
    registered handlers.
    """

    def __init__(self, error_code: ErrorCode) -> None:
        super().__init__(error_code.code)
        self.error_code = error_code


class AccessDeniedError(PermissionError):
    """Authorization failure raised by application code."""


class IllegalStateError(RuntimeError):
    """Operation is not allowed in the current state of the resource."""
