"""Strongly typed identifiers for Whisper domain entities.

NewType keeps a UserId from being passed where an AdminId is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
AdminId = NewType("AdminId", UUID)
MessageId = NewType("MessageId", UUID)
ReplyId = NewType("ReplyId", UUID)
FollowId = NewType("FollowId", UUID)
ReactionId = NewType("ReactionId", UUID)
