"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_USER_ID_HEADER = "X-User-Id"
DEFAULT_USER_ROLE_HEADER = "X-User-Role"


@dataclass(frozen=True)
class CommonSettings:
    """Runtime settings shared by every service using the common layer."""

    log_level: str
    user_id_header: str
    user_role_header: str

    def safe_for_logging(self) -> dict[str, str]:
        """Return settings safe for logs."""
        return {
            "log_level": self.log_level,
            "user_id_header": self.user_id_header,
            "user_role_header": self.user_role_header,
        }


@lru_cache(maxsize=1)
def get_settings() -> CommonSettings:
    """Load common settings from the environment."""
    return CommonSettings(
        log_level=os.getenv("API_COMMON_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        user_id_header=os.getenv("API_COMMON_USER_ID_HEADER", DEFAULT_USER_ID_HEADER),
        user_role_header=os.getenv("API_COMMON_USER_ROLE_HEADER", DEFAULT_USER_ROLE_HEADER),
    )
