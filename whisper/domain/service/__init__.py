"""Domain services."""

from .base import Service
from .follow_service import FollowService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .message_service import MessageService
from .metrics_service import LeaderboardEntry, MetricsService, ProfileStats
from .reaction_service import ReactionService
from .reply_service import ContentSegment, ReplyService, ReplyTreeNode
from .visibility_service import VisibilityService

__all__ = [
    "ContentSegment",
    "FollowService",
    "IdentityService",
    "JWTService",
    "LeaderboardEntry",
    "MessageService",
    "MetricsService",
    "ProfileStats",
    "ReactionService",
    "ReplyService",
    "ReplyTreeNode",
    "Service",
    "VisibilityService",
]
