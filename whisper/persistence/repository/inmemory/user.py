"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from whisper.domain.model.user import User
from whisper.domain.repository.user import UserRepository
from whisper.domain.value import UserId
from whisper.domain.value.types import Username


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_active(self) -> list[User]:
        """Find all active users, oldest first."""
        users = [u for u in self._users.values() if u.is_active]
        users.sort(key=lambda u: u.created_at)
        return users

    async def search(self, query: str, limit: int) -> list[User]:
        """Find active users by username or display name, newest first."""
        needle = query.lower()
        users = [
            u
            for u in self._users.values()
            if u.is_active
            and (
                needle in u.username.root.lower()
                or needle in (u.display_name or "").lower()
            )
        ]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return users[:limit]

    async def save(self, user: User) -> User:
        """Save a user.

        Raises:
            IntegrityError: If another user already has the username
        """
        existing = await self.find_by_username(user.username)
        if existing and existing.id != user.id:
            raise IntegrityError("Duplicate username", None, Exception())
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        return self._users.pop(user_id, None) is not None
