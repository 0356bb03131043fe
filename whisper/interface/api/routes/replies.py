"""Reply routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from whisper.application.usecase.auth import GetCurrentActorUseCase
from whisper.application.usecase.reply import (
    AddReplyRequest,
    AddReplyResponse,
    AddReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
)
from whisper.domain.error import DomainError
from whisper.domain.model import MAX_REPLY_LENGTH
from whisper.interface.error import to_http_exception

router = APIRouter(tags=["replies"], route_class=DishkaRoute)


class AddReplyAPIRequest(BaseModel):
    """API request for replying."""

    content: str = Field(min_length=1, max_length=MAX_REPLY_LENGTH)
    parent_id: UUID | None = None
    nickname: str | None = Field(default=None, max_length=50)


@router.post(
    "/messages/{message_id}/replies",
    response_model=AddReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    message_id: UUID,
    request: AddReplyAPIRequest,
    add_reply_use_case: FromDishka[AddReplyUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AddReplyResponse:
    """Reply to a message, or to a reply via parent_id.

    Replies nest at most three levels deep; deeper replies are rejected
    with 400.

    Args:
        message_id: Message UUID
        request: Reply data
        add_reply_use_case: Add reply use case from DI
        get_current_actor_use_case: Session resolver from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        Created reply

    Raises:
        HTTPException: 404 if the message or parent is missing, 400 if too deep
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await add_reply_use_case.execute(
            AddReplyRequest(
                message_id=str(message_id),
                content=request.content,
                parent_id=str(request.parent_id) if request.parent_id else None,
                nickname=request.nickname,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "add reply")


@router.delete("/replies/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    reply_id: UUID,
    delete_reply_use_case: FromDishka[DeleteReplyUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> DeleteReplyResponse:
    """Delete a reply and everything beneath it. Admin only."""
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await delete_reply_use_case.execute(
            DeleteReplyRequest(reply_id=str(reply_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete reply")
