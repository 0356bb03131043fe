"""Repository interfaces for Whisper domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from whisper.domain.repository.admin import AdminRepository
from whisper.domain.repository.follow import FollowRepository
from whisper.domain.repository.message import MessageRepository
from whisper.domain.repository.reaction import ReactionRepository
from whisper.domain.repository.reply import ReplyRepository
from whisper.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "AdminRepository",
    "MessageRepository",
    "ReplyRepository",
    "FollowRepository",
    "ReactionRepository",
]
