"""PostgreSQL repository implementations."""

from whisper.persistence.repository.admin import PostgresAdminRepository
from whisper.persistence.repository.follow import PostgresFollowRepository
from whisper.persistence.repository.message import PostgresMessageRepository
from whisper.persistence.repository.reaction import PostgresReactionRepository
from whisper.persistence.repository.reply import PostgresReplyRepository
from whisper.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresAdminRepository",
    "PostgresMessageRepository",
    "PostgresReplyRepository",
    "PostgresFollowRepository",
    "PostgresReactionRepository",
]
