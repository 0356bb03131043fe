"""Leaderboard routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from whisper.application.usecase.social import (
    LeaderboardRequest,
    LeaderboardResponse,
    LeaderboardUseCase,
)
from whisper.domain.error import DomainError
from whisper.domain.value.types import LeaderboardMetric
from whisper.interface.error import to_http_exception

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"], route_class=DishkaRoute)


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    leaderboard_use_case: FromDishka[LeaderboardUseCase],
    metric: LeaderboardMetric = LeaderboardMetric.MESSAGES,
    limit: int | None = None,
) -> LeaderboardResponse:
    """Rank active users by messages, replies, reactions or followers.

    Example:
        GET /leaderboard?metric=followers&limit=5
    """
    try:
        return await leaderboard_use_case.execute(
            LeaderboardRequest(metric=metric, limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e, "get leaderboard")
