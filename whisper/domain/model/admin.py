"""Admin entity.

Admins ("Whisper Listeners") moderate the board. Private messages are routed
to them by display name.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from whisper.domain.model.common import DomainModel
from whisper.domain.model.user import MAX_BIO_LENGTH
from whisper.domain.value import AdminId
from whisper.domain.value.types import AdminRole, Username


class Admin(DomainModel):
    """Moderator account."""

    id: AdminId
    username: Username
    password_hash: str
    display_name: str = Field(min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=MAX_BIO_LENGTH)
    profile_picture_url: Optional[str] = Field(default=None, max_length=2000)
    role: AdminRole = AdminRole.ADMIN
    is_active: bool = True
    is_verified: bool = False
    display_name_changed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN

    @property
    def label(self) -> str:
        return self.display_name
