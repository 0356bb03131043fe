"""Register user use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.service import IdentityService, JWTService
from whisper.domain.value.types import ActorKind, Username


class RegisterRequest(BaseModel):
    """Register request."""

    username: str
    password: str
    display_name: str | None = None


class RegisterResponse(BaseModel):
    """Register response."""

    token: str
    account: AccountInfo


class RegisterUseCase:
    """Use case for signing up a Silent Messenger."""

    def __init__(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> None:
        """Initialize register use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute registration flow.

        Steps:
        1. Validate the username format
        2. Create the user (checks both namespaces)
        3. Issue a session token

        Raises:
            ValidationError: If the username or password is invalid
            UsernameTakenError: If the username is taken
        """
        user = await self.identity_service.register_user(
            username=Username.parse(request.username),
            password=request.password,
            display_name=request.display_name,
        )

        token = self.jwt_service.create_token(
            subject_id=str(user.id), kind=ActorKind.USER, username=user.username.root
        )

        return RegisterResponse(token=token, account=AccountInfo.from_domain(user))
