"""In-memory admin repository for testing."""

from typing import Optional

from whisper.domain.model.admin import Admin
from whisper.domain.repository.admin import AdminRepository
from whisper.domain.value import AdminId
from whisper.domain.value.types import Username


class InMemoryAdminRepository(AdminRepository):
    """In-memory implementation of AdminRepository for testing."""

    def __init__(self) -> None:
        self._admins: dict[AdminId, Admin] = {}

    async def find_by_id(self, admin_id: AdminId) -> Optional[Admin]:
        """Find an admin by ID."""
        return self._admins.get(admin_id)

    async def find_by_username(self, username: Username) -> Optional[Admin]:
        """Find an admin by username."""
        for admin in self._admins.values():
            if admin.username == username:
                return admin
        return None

    async def find_by_display_name(self, display_name: str) -> Optional[Admin]:
        """Find an admin by display name."""
        for admin in self._admins.values():
            if admin.display_name == display_name:
                return admin
        return None

    async def find_active(self) -> list[Admin]:
        """Find all active admins ordered by display name."""
        admins = [a for a in self._admins.values() if a.is_active]
        admins.sort(key=lambda a: a.display_name)
        return admins

    async def search(self, query: str, limit: int) -> list[Admin]:
        """Find active admins by username or display name, newest first."""
        needle = query.lower()
        admins = [
            a
            for a in self._admins.values()
            if a.is_active
            and (
                needle in a.username.root.lower() or needle in a.display_name.lower()
            )
        ]
        admins.sort(key=lambda a: a.created_at, reverse=True)
        return admins[:limit]

    async def save(self, admin: Admin) -> Admin:
        """Save an admin."""
        self._admins[admin.id] = admin
        return admin

    async def delete(self, admin_id: AdminId) -> bool:
        """Delete an admin."""
        return self._admins.pop(admin_id, None) is not None
