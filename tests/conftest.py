"""Test configuration and shared factories."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from dishka import AsyncContainer

from whisper.domain.model import Admin, AdminActor, Message, User, UserActor
from whisper.domain.repository import AdminRepository, MessageRepository, UserRepository
from whisper.domain.value import AdminId, MessageId, UserId
from whisper.domain.value.types import AdminRole, Category, Username
from whisper.util.password import hash_password

PASSWORD = "whisper-secret"


def make_user(
    username: str = "quiet_fox",
    display_name: Optional[str] = None,
    is_active: bool = True,
    created_at: Optional[datetime] = None,
) -> User:
    """Build a user whose password is PASSWORD."""
    return User(
        id=UserId(uuid4()),
        username=Username(username),
        password_hash=hash_password(PASSWORD),
        display_name=display_name,
        is_active=is_active,
        created_at=created_at or datetime.now(),
    )


def make_admin(
    username: str = "luna_listens",
    display_name: str = "Luna",
    role: AdminRole = AdminRole.ADMIN,
    is_active: bool = True,
) -> Admin:
    """Build an admin whose password is PASSWORD."""
    return Admin(
        id=AdminId(uuid4()),
        username=Username(username),
        password_hash=hash_password(PASSWORD),
        display_name=display_name,
        role=role,
        is_active=is_active,
        created_at=datetime.now(),
    )


async def add_user(env: AsyncContainer, **kwargs) -> UserActor:
    """Persist a user and return it as an actor."""
    repo = await env.get(UserRepository)
    user = await repo.save(make_user(**kwargs))
    return UserActor(user=user)


async def add_admin(env: AsyncContainer, **kwargs) -> AdminActor:
    """Persist an admin and return it as an actor."""
    repo = await env.get(AdminRepository)
    admin = await repo.save(make_admin(**kwargs))
    return AdminActor(admin=admin)


async def add_message(
    env: AsyncContainer,
    content: str = "Some words into the void",
    is_public: bool = True,
    recipient: Optional[str] = None,
    category: Category = Category.ANYTHING,
    user_id: Optional[UserId] = None,
    reaction_count: int = 0,
) -> Message:
    """Persist a message directly, bypassing the service checks."""
    repo = await env.get(MessageRepository)
    return await repo.save(
        Message(
            id=MessageId(uuid4()),
            category=category,
            content=content,
            is_public=is_public,
            recipient=recipient,
            user_id=user_id,
            reaction_count=reaction_count,
            created_at=datetime.now(),
        )
    )
