"""Leaderboard use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.service import MetricsService
from whisper.domain.value.types import LeaderboardMetric


class LeaderboardRequest(BaseModel):
    """Leaderboard request."""

    metric: LeaderboardMetric = LeaderboardMetric.MESSAGES
    limit: int | None = None


class LeaderboardEntryResponse(BaseModel):
    rank: int
    account: AccountInfo
    value: int


class LeaderboardResponse(BaseModel):
    """Leaderboard response."""

    metric: LeaderboardMetric
    entries: list[LeaderboardEntryResponse]


class LeaderboardUseCase:
    """Use case for ranking users by activity."""

    def __init__(self, metrics_service: MetricsService) -> None:
        self.metrics_service = metrics_service

    async def execute(self, request: LeaderboardRequest) -> LeaderboardResponse:
        """Execute leaderboard flow.

        Raises:
            ValidationError: If the limit is out of range
        """
        entries = await self.metrics_service.leaderboard(request.metric, request.limit)
        return LeaderboardResponse(
            metric=request.metric,
            entries=[
                LeaderboardEntryResponse(
                    rank=entry.rank,
                    account=AccountInfo.from_domain(entry.user),
                    value=entry.value,
                )
                for entry in entries
            ],
        )
