"""PostgreSQL implementation of Admin repository."""

from typing import List, Optional

from sqlalchemy import delete, desc, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from whisper.domain.model import Admin
from whisper.domain.repository import AdminRepository
from whisper.domain.value import AdminId
from whisper.domain.value.types import Username
from whisper.persistence.mappers import admin_to_dict, row_to_admin
from whisper.persistence.repository.message import like_pattern
from whisper.persistence.tables import admins_table


class PostgresAdminRepository(AdminRepository):
    """PostgreSQL implementation of AdminRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, admin_id: AdminId) -> Optional[Admin]:
        """Find an admin by ID."""
        stmt = select(admins_table).where(admins_table.c.id == admin_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_admin(row._asdict()) if row else None

    async def find_by_username(self, username: Username) -> Optional[Admin]:
        """Find an admin by username."""
        stmt = select(admins_table).where(admins_table.c.username == username.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_admin(row._asdict()) if row else None

    async def find_by_display_name(self, display_name: str) -> Optional[Admin]:
        """Find an admin by display name."""
        stmt = select(admins_table).where(admins_table.c.display_name == display_name)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_admin(row._asdict()) if row else None

    async def find_active(self) -> List[Admin]:
        """Find all active admins ordered by display name."""
        stmt = (
            select(admins_table)
            .where(admins_table.c.is_active.is_(True))
            .order_by(admins_table.c.display_name)
        )
        result = await self.session.execute(stmt)
        return [row_to_admin(row._asdict()) for row in result.fetchall()]

    async def search(self, query: str, limit: int) -> List[Admin]:
        """Find active admins by username or display name, newest first."""
        pattern = like_pattern(query)
        stmt = (
            select(admins_table)
            .where(admins_table.c.is_active.is_(True))
            .where(
                or_(
                    admins_table.c.username.ilike(pattern, escape="\\"),
                    admins_table.c.display_name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(desc(admins_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_admin(row._asdict()) for row in result.fetchall()]

    async def save(self, admin: Admin) -> Admin:
        """Save an admin (upsert on id)."""
        admin_dict = admin_to_dict(admin)
        stmt = insert(admins_table).values(**admin_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[admins_table.c.id],
            set_={k: v for k, v in admin_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return admin

    async def delete(self, admin_id: AdminId) -> bool:
        """Delete an admin."""
        stmt = delete(admins_table).where(admins_table.c.id == admin_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
