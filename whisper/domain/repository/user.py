"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from whisper.domain.model.user import User
from whisper.domain.value import UserId
from whisper.domain.value.types import Username


class UserRepository(ABC):
    """Repository for User entity.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username.

        Args:
            username: The user's login name

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[User]:
        """Find all active users, oldest first.

        Returns:
            List of active users ordered by created_at
        """
        pass

    @abstractmethod
    async def search(self, query: str, limit: int) -> List[User]:
        """Find active users by username or display name, newest first.

        Args:
            query: Case-insensitive substring
            limit: Maximum number of results

        Returns:
            Matching users
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            IntegrityError: If the username is already stored
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Args:
            user_id: The user ID to delete

        Returns:
            True if a user was deleted
        """
        pass
