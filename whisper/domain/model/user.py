"""User entity.

Users ("Silent Messengers") are ordinary registered members. They can post
under their own name, reply, react and follow other accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from whisper.domain.model.common import DomainModel
from whisper.domain.value import UserId
from whisper.domain.value.types import Username

MAX_BIO_LENGTH = 500


class User(DomainModel):
    """Registered ordinary member."""

    id: UserId
    username: Username
    password_hash: str
    display_name: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=MAX_BIO_LENGTH)
    profile_picture_url: Optional[str] = Field(default=None, max_length=2000)
    is_verified: bool = False
    is_active: bool = True
    display_name_changed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def label(self) -> str:
        """Name shown next to content this user writes."""
        return self.display_name or self.username.root
