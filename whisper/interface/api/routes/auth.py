"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel, Field

from whisper.application.usecase.auth import (
    CheckUsernameResponse,
    CheckUsernameUseCase,
    GetCurrentActorUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from whisper.application.usecase.common import AccountInfo, ActorInfo
from whisper.config import Settings
from whisper.domain.error import DomainError
from whisper.domain.model import AnonymousActor
from whisper.interface.error import to_http_exception, unexpected_error

AUTH_COOKIE = "auth_token"

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class RegisterAPIRequest(BaseModel):
    """API request for signing up."""

    username: str = Field(min_length=3, max_length=30)
    password: str = Field(min_length=1, max_length=128)
    display_name: str | None = Field(default=None, max_length=100)


class LoginAPIRequest(BaseModel):
    """API request for signing in."""

    username: str
    password: str


class RegisterAPIResponse(BaseModel):
    account: AccountInfo


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return the current actor if authenticated,
    or indicate anonymous state without raising an error.
    """

    authenticated: bool
    actor: ActorInfo


@router.get("/check-username/{username}", response_model=CheckUsernameResponse)
async def check_username(
    username: str,
    check_username_use_case: FromDishka[CheckUsernameUseCase],
) -> CheckUsernameResponse:
    """Check whether a username is free in both the user and admin namespaces."""
    return await check_username_use_case.execute(username)


@router.post(
    "/register",
    response_model=RegisterAPIResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterAPIRequest,
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
    settings: FromDishka[Settings],
) -> RegisterAPIResponse:
    """Create a user account and start a session.

    Args:
        request: Sign-up data
        response: FastAPI response object (receives the session cookie)
        register_use_case: Register use case from DI
        settings: Application settings from DI

    Returns:
        The new account

    Raises:
        HTTPException: 400 on invalid input, 409 if the username is taken
    """
    try:
        result = await register_use_case.execute(
            RegisterRequest(
                username=request.username,
                password=request.password,
                display_name=request.display_name,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "register")

    _set_session_cookie(response, result.token, settings)
    return RegisterAPIResponse(account=result.account)


@router.post("/login", response_model=AuthStatusResponse)
async def login(
    request: LoginAPIRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> AuthStatusResponse:
    """Sign in as a user or an admin.

    Usernames are unique across both namespaces, so one form serves both.

    Raises:
        HTTPException: 401 on wrong credentials or a disabled account
    """
    try:
        result = await login_use_case.execute(
            LoginRequest(username=request.username, password=request.password)
        )
    except DomainError as e:
        raise to_http_exception(e, "login")
    except Exception as e:
        raise unexpected_error(e, "log in")

    _set_session_cookie(response, result.token, settings)
    return AuthStatusResponse(authenticated=True, actor=result.actor)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout by clearing the authentication cookie."""
    response.delete_cookie(
        key=AUTH_COOKIE,
        path="/",
        secure=settings.environment == "production",
        httponly=True,
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_actor(
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get the current actor.

    Safe to call without a session: anonymous visitors get
    authenticated=false instead of an error.

    Examples:
        Anonymous:
        {
            "authenticated": false,
            "actor": {"kind": "anonymous", "account": null}
        }
    """
    actor = await get_current_actor_use_case.execute(auth_token)
    return AuthStatusResponse(
        authenticated=not isinstance(actor, AnonymousActor),
        actor=ActorInfo.from_domain(actor),
    )


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    # Cross-site frontends need samesite="none", which requires secure
    is_production = settings.environment == "production"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
