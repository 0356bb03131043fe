"""Domain value objects for Whisper."""

from whisper.domain.value.identifiers import (
    AdminId,
    FollowId,
    MessageId,
    ReactionId,
    ReplyId,
    UserId,
)
from whisper.domain.value.types import (
    ActorKind,
    AdminRole,
    AuthorRef,
    Category,
    LeaderboardMetric,
    ReactionType,
    Username,
    Visibility,
)

__all__ = [
    # Identifiers
    "UserId",
    "AdminId",
    "MessageId",
    "ReplyId",
    "FollowId",
    "ReactionId",
    # Types
    "ActorKind",
    "AdminRole",
    "AuthorRef",
    "Category",
    "LeaderboardMetric",
    "ReactionType",
    "Username",
    "Visibility",
]
