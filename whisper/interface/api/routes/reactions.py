"""Reaction routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from whisper.application.usecase.auth import GetCurrentActorUseCase
from whisper.application.usecase.social import (
    ReactRequest,
    ReactResponse,
    ReactUseCase,
    UnreactUseCase,
)
from whisper.domain.error import DomainError
from whisper.interface.error import to_http_exception

router = APIRouter(tags=["reactions"], route_class=DishkaRoute)


@router.post("/messages/{message_id}/reactions", response_model=ReactResponse)
async def react(
    message_id: UUID,
    react_use_case: FromDishka[ReactUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ReactResponse:
    """Heart a message.

    Requires a signed-in user or admin. Reacting twice is rejected with 400.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await react_use_case.execute(
            ReactRequest(message_id=str(message_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "react")


@router.delete("/messages/{message_id}/reactions", response_model=ReactResponse)
async def unreact(
    message_id: UUID,
    unreact_use_case: FromDishka[UnreactUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ReactResponse:
    """Withdraw a reaction. Succeeds even if there was none."""
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await unreact_use_case.execute(
            ReactRequest(message_id=str(message_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "remove reaction")
