"""Message routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel, Field

from whisper.application.usecase.auth import GetCurrentActorUseCase
from whisper.application.usecase.common import MessageInfo
from whisper.application.usecase.message import (
    CreateMessageRequest,
    CreateMessageUseCase,
    DeleteMessageRequest,
    DeleteMessageUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ListPrivateMessagesRequest,
    ListPrivateMessagesResponse,
    ListPrivateMessagesUseCase,
    ListPublicMessagesRequest,
    ListPublicMessagesResponse,
    ListPublicMessagesUseCase,
    PromoteMessageRequest,
    PromoteMessageUseCase,
)
from whisper.domain.error import DomainError
from whisper.domain.model import MAX_MESSAGE_LENGTH
from whisper.interface.error import to_http_exception, unexpected_error

router = APIRouter(prefix="/messages", tags=["messages"], route_class=DishkaRoute)


class CreateMessageAPIRequest(BaseModel):
    """API request for posting a message."""

    category: str
    content: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    is_public: bool = True
    recipient: str | None = None
    sender_name: str | None = Field(default=None, max_length=100)
    media_link: str | None = Field(default=None, max_length=2000)


class PromoteMessageAPIRequest(BaseModel):
    """API request for changing a message's visibility."""

    is_public: bool


@router.post("", response_model=MessageInfo, status_code=status.HTTP_201_CREATED)
async def create_message(
    request: CreateMessageAPIRequest,
    create_message_use_case: FromDishka[CreateMessageUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> MessageInfo:
    """Post a message.

    Anyone may post. Private messages must name an active admin as recipient
    and only become visible to others once promoted.

    Args:
        request: Message data
        create_message_use_case: Create message use case from DI
        get_current_actor_use_case: Session resolver from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        Created message

    Raises:
        HTTPException: 400 on invalid input, 404 for an unknown recipient

    Example:
        POST /messages
        {
            "category": "Confession",
            "content": "I never told anyone...",
            "is_public": false,
            "recipient": "Luna"
        }
    """
    actor = await get_current_actor_use_case.execute(auth_token)

    try:
        return await create_message_use_case.execute(
            CreateMessageRequest(
                category=request.category,
                content=request.content,
                is_public=request.is_public,
                recipient=request.recipient,
                sender_name=request.sender_name,
                media_link=request.media_link,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "create message")
    except Exception as e:
        raise unexpected_error(e, "create message")


@router.get("", response_model=ListPublicMessagesResponse)
async def list_public_messages(
    list_public_messages_use_case: FromDishka[ListPublicMessagesUseCase],
    category: str | None = None,
    q: str | None = None,
) -> ListPublicMessagesResponse:
    """List public messages, newest first.

    Args:
        category: Optional category filter
        q: Optional search text over content, category and sender name
    """
    try:
        return await list_public_messages_use_case.execute(
            ListPublicMessagesRequest(category=category, query=q)
        )
    except DomainError as e:
        raise to_http_exception(e, "list messages")


@router.get("/private", response_model=ListPrivateMessagesResponse)
async def list_private_messages(
    list_private_messages_use_case: FromDishka[ListPrivateMessagesUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    recipient: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ListPrivateMessagesResponse:
    """List a moderator's private inbox.

    Admins read their own inbox by default; super-admins may name any
    recipient.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await list_private_messages_use_case.execute(
            ListPrivateMessagesRequest(recipient=recipient, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "list private messages")


@router.get("/{message_id}", response_model=GetThreadResponse)
async def get_message(
    message_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetThreadResponse:
    """Get a message with its nested reply tree.

    Private messages are reported as missing to anyone but admins.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(message_id=str(message_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "get message")


@router.patch("/{message_id}", response_model=MessageInfo)
async def promote_message(
    message_id: UUID,
    request: PromoteMessageAPIRequest,
    promote_message_use_case: FromDishka[PromoteMessageUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> MessageInfo:
    """Make a private message public. Admin only.

    Promotion is one-way: a second promotion, or a request to make a message
    private again, is rejected with 400.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await promote_message_use_case.execute(
            PromoteMessageRequest(
                message_id=str(message_id), is_public=request.is_public, actor=actor
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "promote message")


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: UUID,
    delete_message_use_case: FromDishka[DeleteMessageUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Delete a message with all of its replies and reactions. Admin only."""
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        await delete_message_use_case.execute(
            DeleteMessageRequest(message_id=str(message_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete message")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
