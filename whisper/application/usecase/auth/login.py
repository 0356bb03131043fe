"""Login use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import ActorInfo
from whisper.domain.model import AdminActor
from whisper.domain.service import IdentityService, JWTService


class LoginRequest(BaseModel):
    """Login request."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    actor: ActorInfo


class LoginUseCase:
    """Use case for signing in a user or an admin."""

    def __init__(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Raises:
            InvalidCredentialsError: If the username or password is wrong
            AccountDisabledError: If the account is deactivated
        """
        actor = await self.identity_service.authenticate(
            request.username, request.password
        )
        account = actor.admin if isinstance(actor, AdminActor) else actor.user

        token = self.jwt_service.create_token(
            subject_id=str(account.id),
            kind=actor.kind,
            username=account.username.root,
        )

        return LoginResponse(token=token, actor=ActorInfo.from_domain(actor))
