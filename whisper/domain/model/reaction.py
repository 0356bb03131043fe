"""Reaction entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from whisper.domain.model.common import DomainModel
from whisper.domain.value import AdminId, MessageId, ReactionId, UserId
from whisper.domain.value.types import ReactionType


class Reaction(DomainModel):
    """Reaction on a message.

    Business rules:
    - Exactly one of user_id/admin_id is set (anonymous visitors cannot react)
    - One reaction per reactor per message
    """

    id: ReactionId
    message_id: MessageId
    user_id: Optional[UserId] = None
    admin_id: Optional[AdminId] = None
    type: ReactionType = ReactionType.HEART
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_reactor(self) -> "Reaction":
        if (self.user_id is None) == (self.admin_id is None):
            raise ValueError("A reaction needs exactly one of user_id or admin_id")
        return self
