"""JWT token domain service."""

import logfire

from whisper.config import AuthSettings
from whisper.domain.value.types import ActorKind
from whisper.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, subject_id: str, kind: ActorKind, username: str) -> str:
        """Create a session token for a user or admin.

        Args:
            subject_id: User or admin ID
            kind: Account kind
            username: Login name

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", subject_id=subject_id, kind=kind.value
        ):
            token = create_token(subject_id, kind, username, self.auth_settings)
            logfire.info("JWT token created", subject_id=subject_id, kind=kind.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified",
                    subject_id=payload.subject_id,
                    kind=payload.kind.value,
                )
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Decode a session token without raising.

        Routes use this to treat a missing or invalid token as an anonymous
        visitor.

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload if valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except Exception as e:
            logfire.debug(
                "JWT verification failed, treating as anonymous", error=str(e)
            )
            return None
