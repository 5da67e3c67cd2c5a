"""User roles propagated by the gateway."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Known user roles with their display descriptions."""

    USER = "USER"
    SELLER = "SELLER"
    MASTER = "MASTER"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_value(cls, raw: str | None) -> UserRole:
        """Parse a role name case-insensitively.

        Raises ``ValueError`` for blank or unknown input, which the error
        handlers translate to ``INVALID_PARAMETER``.
        """
        if raw is None or not raw.strip():
            raise ValueError("권한은 필수입니다")

        normalized = raw.strip().upper()
        for role in cls:
            if role.value == normalized:
                return role
        raise ValueError(f"유효하지 않은 권한입니다: {raw}")


_DESCRIPTIONS = {
    UserRole.USER: "일반 사용자",
    UserRole.SELLER: "판매자",
    UserRole.MASTER: "마스터 관리자",
}
