"""Caller identity routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from api_common.core.config import get_settings
from api_common.core.exceptions import AccessDeniedError
from api_common.core.identity import get_current_user_id
from api_common.core.roles import UserRole
from api_common.schemas.response import ApiResponse

router = APIRouter(prefix="/api/v1", tags=["identity"])


class CurrentUser(BaseModel):
    """Identity resolved from gateway headers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: int
    role: UserRole
    role_description: str


@router.get("/me")
def get_me_endpoint(
    request: Request,
    user_id: int | None = Depends(get_current_user_id),
) -> dict:
    """Return the caller identity in the success envelope."""
    if user_id is None:
        raise AccessDeniedError("missing or invalid user id header")

    role = UserRole.from_value(request.headers.get(get_settings().user_role_header))
    current = CurrentUser(user_id=user_id, role=role, role_description=role.description)
    return ApiResponse[CurrentUser].ok(current).to_content()
