"""Message entity.

A message is a categorized post that is either public or addressed
privately to one moderator by display name.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from whisper.domain.model.common import DomainModel
from whisper.domain.value import AdminId, MessageId, UserId
from whisper.domain.value.types import AuthorRef, Category, Visibility

MAX_MESSAGE_LENGTH = 5000


class Message(DomainModel):
    """Message entity.

    Business rules:
    - A private message always names a recipient
    - At most one of user_id/admin_id is set
    - Visibility only moves from private to public
    """

    id: MessageId
    category: Category
    content: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    media_link: Optional[str] = None
    is_public: bool
    recipient: Optional[str] = None
    sender_name: Optional[str] = Field(default=None, max_length=100)
    user_id: Optional[UserId] = None
    admin_id: Optional[AdminId] = None
    reaction_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_invariants(self) -> "Message":
        """Validate recipient and attribution invariants."""
        if not self.is_public and not (self.recipient and self.recipient.strip()):
            raise ValueError("Private messages require a recipient")
        if self.user_id is not None and self.admin_id is not None:
            raise ValueError("A message cannot belong to both a user and an admin")
        return self

    @property
    def author(self) -> AuthorRef:
        return AuthorRef.resolve(self.user_id, self.admin_id)

    @property
    def visibility(self) -> Visibility:
        return Visibility.PUBLIC if self.is_public else Visibility.PRIVATE_PENDING
