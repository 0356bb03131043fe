"""Reply entity.

Replies form a tree under a message. Depth is not stored; it follows from
the chain of parent_id links.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from whisper.domain.model.common import DomainModel
from whisper.domain.value import AdminId, MessageId, ReplyId, UserId
from whisper.domain.value.types import AuthorRef

MAX_REPLY_LENGTH = 2000


class Reply(DomainModel):
    """Reply to a message or to another reply.

    - parent_id: Direct parent reply (None for top-level)
    - nickname: Label resolved when the reply was written
    """

    id: ReplyId
    message_id: MessageId
    parent_id: Optional[ReplyId] = None
    content: str = Field(min_length=1, max_length=MAX_REPLY_LENGTH)
    nickname: str = Field(default="Anonymous", min_length=1, max_length=100)
    user_id: Optional[UserId] = None
    admin_id: Optional[AdminId] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_attribution(self) -> "Reply":
        if self.user_id is not None and self.admin_id is not None:
            raise ValueError("A reply cannot belong to both a user and an admin")
        return self

    @property
    def author(self) -> AuthorRef:
        return AuthorRef.resolve(self.user_id, self.admin_id)
