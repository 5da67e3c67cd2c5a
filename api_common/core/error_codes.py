"""Stable error code registry shared by every API error response."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from fastapi import status


class ErrorCode(Protocol):
    """Contract for any error code published in the error envelope.

    ``code`` is a wire contract: renaming it breaks every client that branches on it.
    """

    @property
    def http_status(self) -> int: ...

    @property
    def code(self) -> str: ...

    @property
    def message(self) -> str: ...


class CommonErrorCode(Enum):
    """Error codes shared across services."""

    INVALID_PARAMETER = (status.HTTP_400_BAD_REQUEST, "INVALID_PARAMETER", "파라미터가 올바르지 않습니다.")
    FORBIDDEN = (status.HTTP_403_FORBIDDEN, "ACCESS_DENIED", "접근 권한이 없습니다.")
    RESOURCE_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND", "리소스를 찾을 수 없습니다.")
    STATE_CONFLICT = (status.HTTP_409_CONFLICT, "STATE_CONFLICT", "상태 충돌 또는 잘못된 상태 전이입니다.")
    INTERNAL_SERVER_ERROR = (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "서버 내부 오류가 발생했습니다.",
    )

    def __init__(self, http_status: int, code: str, message: str) -> None:
        self._http_status = http_status
        self._code = code
        self._message = message

    @property
    def http_status(self) -> int:
        return self._http_status

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @classmethod
    def from_code(cls, code: str) -> CommonErrorCode:
        """Return the member publishing ``code``; raise ``KeyError`` if none does."""
        for member in cls:
            if member.code == code:
                return member
        raise KeyError(code)

    @classmethod
    def for_status(cls, http_status: int) -> CommonErrorCode | None:
        """Return the first member mapped to ``http_status``, if any."""
        for member in cls:
            if member.http_status == http_status:
                return member
        return None
