"""Search accounts use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.service import IdentityService


class SearchAccountsRequest(BaseModel):
    """Search accounts request."""

    query: str


class SearchAccountsResponse(BaseModel):
    """Matching users and admins, newest first."""

    users: list[AccountInfo]
    admins: list[AccountInfo]


class SearchAccountsUseCase:
    """Use case for finding users and admins by name."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: SearchAccountsRequest) -> SearchAccountsResponse:
        """Execute search accounts flow.

        Raises:
            ValidationError: If the query is too short
        """
        users, admins = await self.identity_service.search_accounts(request.query)
        return SearchAccountsResponse(
            users=[AccountInfo.from_domain(u) for u in users],
            admins=[AccountInfo.from_domain(a) for a in admins],
        )
