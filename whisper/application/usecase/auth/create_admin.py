"""Create admin use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.model import Actor
from whisper.domain.service import IdentityService
from whisper.domain.value.types import AdminRole, Username


class CreateAdminRequest(BaseModel):
    """Create admin request."""

    username: str
    password: str
    display_name: str
    role: AdminRole = AdminRole.ADMIN
    actor: Actor  # Acting principal from session


class CreateAdminUseCase:
    """Use case for a super-admin adding a Whisper Listener."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize create admin use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: CreateAdminRequest) -> AccountInfo:
        """Execute create admin flow.

        Raises:
            NotAuthorizedError: If the actor is not a super-admin
            UsernameTakenError: If the username is taken
            DisplayNameTakenError: If the display name is taken
        """
        admin = await self.identity_service.create_admin(
            username=Username.parse(request.username),
            password=request.password,
            display_name=request.display_name,
            role=request.role,
            acting=request.actor,
        )
        return AccountInfo.from_domain(admin)
