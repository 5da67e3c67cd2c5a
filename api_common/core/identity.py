"""Resolution of the acting user from gateway-provided headers."""

from __future__ import annotations

import logging
import re

from fastapi import Request

from api_common.core.config import get_settings

logger = logging.getLogger(__name__)

_USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def resolve_user_id(header_value: str | None) -> int | None:
    """Parse a user id header value.

    Missing or blank values resolve to ``None`` silently. Unparseable values
    also resolve to ``None`` and are logged; they never fail the request.
    """
    if header_value is None or not header_value.strip():
        return None

    candidate = header_value.strip()
    if not _USER_ID_PATTERN.fullmatch(candidate):
        logger.warning("Invalid user id format in header: %r", header_value)
        return None
    return int(candidate)


def get_current_user_id(request: Request) -> int | None:
    """FastAPI dependency returning the caller's user id, if the gateway sent one."""
    return resolve_user_id(request.headers.get(get_settings().user_id_header))
