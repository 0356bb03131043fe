"""Admin management routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from whisper.application.usecase.auth import (
    CreateAdminRequest,
    CreateAdminUseCase,
    GetCurrentActorUseCase,
)
from whisper.application.usecase.common import AccountInfo
from whisper.domain.error import DomainError
from whisper.domain.value.types import AdminRole
from whisper.interface.error import to_http_exception

router = APIRouter(prefix="/admins", tags=["admins"], route_class=DishkaRoute)


class CreateAdminAPIRequest(BaseModel):
    """API request for adding an admin."""

    username: str = Field(min_length=3, max_length=30)
    password: str = Field(min_length=1, max_length=128)
    display_name: str = Field(min_length=1, max_length=100)
    role: AdminRole = AdminRole.ADMIN


@router.post("", response_model=AccountInfo, status_code=status.HTTP_201_CREATED)
async def create_admin(
    request: CreateAdminAPIRequest,
    create_admin_use_case: FromDishka[CreateAdminUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountInfo:
    """Create an admin account. Super-admin only.

    Raises:
        HTTPException: 403 for non super-admins, 409 if a name is taken
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await create_admin_use_case.execute(
            CreateAdminRequest(
                username=request.username,
                password=request.password,
                display_name=request.display_name,
                role=request.role,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "create admin")
