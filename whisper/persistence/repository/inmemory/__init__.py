"""In-memory repository implementations for testing."""

from .admin import InMemoryAdminRepository
from .follow import InMemoryFollowRepository
from .message import InMemoryMessageRepository
from .reaction import InMemoryReactionRepository
from .reply import InMemoryReplyRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAdminRepository",
    "InMemoryFollowRepository",
    "InMemoryMessageRepository",
    "InMemoryReactionRepository",
    "InMemoryReplyRepository",
    "InMemoryUserRepository",
]
