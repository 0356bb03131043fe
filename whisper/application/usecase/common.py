"""Response models shared by several use cases."""

from datetime import datetime
from typing import Union

from pydantic import BaseModel

from whisper.domain.model import Actor, Admin, AnonymousActor, Message, User, UserActor
from whisper.domain.value.types import ActorKind, AdminRole, Category


class AccountInfo(BaseModel):
    """Public view of a user or admin account."""

    account_id: str
    kind: ActorKind
    username: str
    display_name: str | None
    role: AdminRole | None
    bio: str | None
    profile_picture_url: str | None
    is_verified: bool
    is_active: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, account: Union[User, Admin]) -> "AccountInfo":
        if isinstance(account, Admin):
            return cls(
                account_id=str(account.id),
                kind=ActorKind.ADMIN,
                username=account.username.root,
                display_name=account.display_name,
                role=account.role,
                bio=account.bio,
                profile_picture_url=account.profile_picture_url,
                is_verified=account.is_verified,
                is_active=account.is_active,
                created_at=account.created_at,
            )
        return cls(
            account_id=str(account.id),
            kind=ActorKind.USER,
            username=account.username.root,
            display_name=account.display_name,
            role=None,
            bio=account.bio,
            profile_picture_url=account.profile_picture_url,
            is_verified=account.is_verified,
            is_active=account.is_active,
            created_at=account.created_at,
        )


class ActorInfo(BaseModel):
    """Who the current request is acting as."""

    kind: ActorKind
    account: AccountInfo | None

    @classmethod
    def from_domain(cls, actor: Actor) -> "ActorInfo":
        if isinstance(actor, AnonymousActor):
            return cls(kind=ActorKind.ANONYMOUS, account=None)
        account = actor.user if isinstance(actor, UserActor) else actor.admin
        return cls(kind=actor.kind, account=AccountInfo.from_domain(account))


class MessageInfo(BaseModel):
    """Message as returned by the API."""

    message_id: str
    category: Category
    content: str
    media_link: str | None
    is_public: bool
    recipient: str | None
    sender_name: str | None
    author_kind: ActorKind
    user_id: str | None
    admin_id: str | None
    reaction_count: int
    reply_count: int
    created_at: datetime

    @classmethod
    def from_domain(cls, message: Message) -> "MessageInfo":
        return cls(
            message_id=str(message.id),
            category=message.category,
            content=message.content,
            media_link=message.media_link,
            is_public=message.is_public,
            recipient=message.recipient,
            sender_name=message.sender_name,
            author_kind=message.author.kind,
            user_id=str(message.user_id) if message.user_id else None,
            admin_id=str(message.admin_id) if message.admin_id else None,
            reaction_count=message.reaction_count,
            reply_count=message.reply_count,
            created_at=message.created_at,
        )
