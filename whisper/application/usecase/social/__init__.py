"""Social use cases: follows, reactions and leaderboards."""

from .follow import FollowRequest, FollowResponse, FollowUseCase, UnfollowUseCase
from .leaderboard import (
    LeaderboardEntryResponse,
    LeaderboardRequest,
    LeaderboardResponse,
    LeaderboardUseCase,
)
from .react import ReactRequest, ReactResponse, ReactUseCase, UnreactUseCase

__all__ = [
    "FollowRequest",
    "FollowResponse",
    "FollowUseCase",
    "LeaderboardEntryResponse",
    "LeaderboardRequest",
    "LeaderboardResponse",
    "LeaderboardUseCase",
    "ReactRequest",
    "ReactResponse",
    "ReactUseCase",
    "UnfollowUseCase",
    "UnreactUseCase",
]
