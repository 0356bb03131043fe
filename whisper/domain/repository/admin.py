"""Admin repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from whisper.domain.model.admin import Admin
from whisper.domain.value import AdminId
from whisper.domain.value.types import Username


class AdminRepository(ABC):
    """Repository for Admin entity."""

    @abstractmethod
    async def find_by_id(self, admin_id: AdminId) -> Optional[Admin]:
        """Find an admin by ID.

        Args:
            admin_id: The admin's unique identifier

        Returns:
            The admin if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[Admin]:
        """Find an admin by username.

        Args:
            username: The admin's login name

        Returns:
            The admin if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_display_name(self, display_name: str) -> Optional[Admin]:
        """Find an admin by display name (exact match).

        Private messages are routed by display name.

        Args:
            display_name: The admin's display name

        Returns:
            The admin if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[Admin]:
        """Find all active admins ordered by display name.

        Returns:
            List of active admins
        """
        pass

    @abstractmethod
    async def search(self, query: str, limit: int) -> List[Admin]:
        """Find active admins by username or display name, newest first.

        Args:
            query: Case-insensitive substring
            limit: Maximum number of results

        Returns:
            Matching admins
        """
        pass

    @abstractmethod
    async def save(self, admin: Admin) -> Admin:
        """Save an admin (create or update).

        Args:
            admin: The admin to save

        Returns:
            The saved admin
        """
        pass

    @abstractmethod
    async def delete(self, admin_id: AdminId) -> bool:
        """Delete an admin.

        Args:
            admin_id: The admin ID to delete

        Returns:
            True if an admin was deleted
        """
        pass
