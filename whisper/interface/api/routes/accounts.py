"""Account routes: profiles, search, moderation and follows."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from whisper.application.usecase.account import (
    DeleteAccountRequest,
    DeleteAccountUseCase,
    GetProfileRequest,
    GetProfileResponse,
    GetProfileUseCase,
    ListAccountMessagesRequest,
    ListAccountMessagesResponse,
    ListAccountMessagesUseCase,
    SearchAccountsRequest,
    SearchAccountsResponse,
    SearchAccountsUseCase,
    SetStatusRequest,
    SetStatusUseCase,
    SetVerificationRequest,
    SetVerificationUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from whisper.application.usecase.auth import GetCurrentActorUseCase
from whisper.application.usecase.common import AccountInfo
from whisper.application.usecase.social import (
    FollowRequest,
    FollowResponse,
    FollowUseCase,
    UnfollowUseCase,
)
from whisper.domain.error import DomainError
from whisper.domain.value.types import ActorKind
from whisper.interface.error import to_http_exception

router = APIRouter(prefix="/accounts", tags=["accounts"], route_class=DishkaRoute)


class VerificationAPIRequest(BaseModel):
    is_verified: bool


class StatusAPIRequest(BaseModel):
    is_active: bool


class ProfileAPIRequest(BaseModel):
    display_name: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None


@router.get("/search", response_model=SearchAccountsResponse)
async def search_accounts(
    search_accounts_use_case: FromDishka[SearchAccountsUseCase],
    q: str = "",
) -> SearchAccountsResponse:
    """Find active users and admins whose username or display name contains q.

    Example:
        GET /accounts/search?q=lu

        Response:
        {
            "users": [...],
            "admins": [{"username": "luna_listens", "display_name": "Luna", ...}]
        }
    """
    try:
        return await search_accounts_use_case.execute(SearchAccountsRequest(query=q))
    except DomainError as e:
        raise to_http_exception(e, "search accounts")


@router.patch("/{kind}/{account_id}", response_model=AccountInfo)
async def update_profile(
    kind: ActorKind,
    account_id: UUID,
    request: ProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountInfo:
    """Edit your own display name, bio or profile picture.

    Omitted fields stay as they are; an empty string clears a field.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await update_profile_use_case.execute(
            UpdateProfileRequest(
                kind=kind,
                account_id=str(account_id),
                display_name=request.display_name,
                bio=request.bio,
                profile_picture_url=request.profile_picture_url,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "update profile")


@router.get("/{kind}/{account_id}/messages", response_model=ListAccountMessagesResponse)
async def list_account_messages(
    kind: ActorKind,
    account_id: UUID,
    list_account_messages_use_case: FromDishka[ListAccountMessagesUseCase],
) -> ListAccountMessagesResponse:
    """List the public messages an account has written, newest first."""
    try:
        return await list_account_messages_use_case.execute(
            ListAccountMessagesRequest(kind=kind, account_id=str(account_id))
        )
    except DomainError as e:
        raise to_http_exception(e, "list account messages")


@router.patch("/{kind}/{account_id}/verification", response_model=AccountInfo)
async def set_verification(
    kind: ActorKind,
    account_id: UUID,
    request: VerificationAPIRequest,
    set_verification_use_case: FromDishka[SetVerificationUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountInfo:
    """Grant or revoke the verified badge. Super-admin only."""
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await set_verification_use_case.execute(
            SetVerificationRequest(
                kind=kind,
                account_id=str(account_id),
                verified=request.is_verified,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "change verification")


@router.patch("/{kind}/{account_id}/status", response_model=AccountInfo)
async def set_status(
    kind: ActorKind,
    account_id: UUID,
    request: StatusAPIRequest,
    set_status_use_case: FromDishka[SetStatusUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountInfo:
    """Activate or deactivate an account.

    Any admin may change a user; changing an admin needs a super-admin.
    Deactivated accounts cannot sign in and their sessions resolve to
    anonymous.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await set_status_use_case.execute(
            SetStatusRequest(
                kind=kind,
                account_id=str(account_id),
                is_active=request.is_active,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "change account status")


@router.delete("/{kind}/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    kind: ActorKind,
    account_id: UUID,
    delete_account_use_case: FromDishka[DeleteAccountUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Delete an account. Super-admin only.

    Messages and replies written by the account stay on the board without an
    author.
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        await delete_account_use_case.execute(
            DeleteAccountRequest(kind=kind, account_id=str(account_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete account")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{kind}/{account_id}/follow", response_model=FollowResponse)
async def follow(
    kind: ActorKind,
    account_id: UUID,
    follow_use_case: FromDishka[FollowUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FollowResponse:
    """Follow a user or admin. Following twice keeps a single edge."""
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await follow_use_case.execute(
            FollowRequest(followee_kind=kind, followee_id=str(account_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "follow")


@router.delete("/{kind}/{account_id}/follow", response_model=FollowResponse)
async def unfollow(
    kind: ActorKind,
    account_id: UUID,
    unfollow_use_case: FromDishka[UnfollowUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FollowResponse:
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await unfollow_use_case.execute(
            FollowRequest(followee_kind=kind, followee_id=str(account_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "unfollow")


@router.get("/{kind}/{account_id}/stats", response_model=GetProfileResponse)
async def get_profile_stats(
    kind: ActorKind,
    account_id: UUID,
    get_profile_use_case: FromDishka[GetProfileUseCase],
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetProfileResponse:
    """Get an account with its message, reply, reaction and follow counts.

    Example:
        GET /accounts/user/123e4567-e89b-12d3-a456-426614174000/stats

        Response:
        {
            "account": {...},
            "message_count": 12,
            "reply_count": 30,
            "reaction_total": 41,
            "follower_count": 3,
            "following_count": 5,
            "is_following": false
        }
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    try:
        return await get_profile_use_case.execute(
            GetProfileRequest(kind=kind, account_id=str(account_id), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e, "get profile stats")
