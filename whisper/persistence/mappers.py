"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from whisper.domain.model import Admin, Follow, Message, Reaction, Reply, User
from whisper.domain.value import (
    ActorKind,
    AdminId,
    AdminRole,
    Category,
    FollowId,
    MessageId,
    ReactionId,
    ReactionType,
    ReplyId,
    UserId,
    Username,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        password_hash=row["password_hash"],
        display_name=row.get("display_name"),
        bio=row.get("bio"),
        profile_picture_url=row.get("profile_picture_url"),
        is_verified=row["is_verified"],
        is_active=row["is_active"],
        display_name_changed_at=row.get("display_name_changed_at"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_admin(row: Dict[str, Any]) -> Admin:
    """Convert database row to Admin domain model."""
    return Admin(
        id=AdminId(_uuid(row["id"])),
        username=Username(row["username"]),
        password_hash=row["password_hash"],
        display_name=row["display_name"],
        bio=row.get("bio"),
        profile_picture_url=row.get("profile_picture_url"),
        role=AdminRole(row["role"]),
        is_active=row["is_active"],
        is_verified=row["is_verified"],
        display_name_changed_at=row.get("display_name_changed_at"),
        created_at=row["created_at"],
    )


def admin_to_dict(admin: Admin) -> Dict[str, Any]:
    """Convert Admin domain model to database dict."""
    data = admin.model_dump()
    data["role"] = admin.role.value
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model.

    Args:
        row: Database row as dict

    Returns:
        Message domain model
    """
    user_id = _uuid(row.get("user_id"))
    admin_id = _uuid(row.get("admin_id"))
    return Message(
        id=MessageId(_uuid(row["id"])),
        category=Category(row["category"]),
        content=row["content"],
        media_link=row.get("media_link"),
        is_public=row["is_public"],
        recipient=row.get("recipient"),
        sender_name=row.get("sender_name"),
        user_id=UserId(user_id) if user_id else None,
        admin_id=AdminId(admin_id) if admin_id else None,
        reaction_count=row["reaction_count"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict."""
    data = message.model_dump()
    data["category"] = message.category.value
    return data


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model."""
    parent_id = _uuid(row.get("parent_id"))
    user_id = _uuid(row.get("user_id"))
    admin_id = _uuid(row.get("admin_id"))
    return Reply(
        id=ReplyId(_uuid(row["id"])),
        message_id=MessageId(_uuid(row["message_id"])),
        parent_id=ReplyId(parent_id) if parent_id else None,
        content=row["content"],
        nickname=row["nickname"],
        user_id=UserId(user_id) if user_id else None,
        admin_id=AdminId(admin_id) if admin_id else None,
        created_at=row["created_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict."""
    return reply.model_dump()


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        follower_id=UserId(_uuid(row["follower_id"])),
        followee_kind=ActorKind(row["followee_kind"]),
        followee_id=_uuid(row["followee_id"]),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    data = follow.model_dump()
    data["followee_kind"] = follow.followee_kind.value
    return data


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert database row to Reaction domain model."""
    user_id = _uuid(row.get("user_id"))
    admin_id = _uuid(row.get("admin_id"))
    return Reaction(
        id=ReactionId(_uuid(row["id"])),
        message_id=MessageId(_uuid(row["message_id"])),
        user_id=UserId(user_id) if user_id else None,
        admin_id=AdminId(admin_id) if admin_id else None,
        type=ReactionType(row["type"]),
        created_at=row["created_at"],
    )


def reaction_to_dict(reaction: Reaction) -> Dict[str, Any]:
    """Convert Reaction domain model to database dict."""
    data = reaction.model_dump()
    data["type"] = reaction.type.value
    return data
