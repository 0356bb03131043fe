"""Get current actor use case."""

from uuid import UUID

from whisper.domain.model import Actor, AnonymousActor
from whisper.domain.service import IdentityService, JWTService


class GetCurrentActorUseCase:
    """Use case for resolving the session cookie to the acting principal.

    A missing, invalid or expired token, or one naming a deleted or
    deactivated account, resolves to an anonymous visitor.
    """

    def __init__(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> None:
        self.jwt_service = jwt_service
        self.identity_service = identity_service

    async def execute(self, token: str | None) -> Actor:
        payload = self.jwt_service.get_payload_from_token(token)
        if payload is None:
            return AnonymousActor()

        try:
            subject_id = UUID(payload.subject_id)
        except ValueError:
            return AnonymousActor()

        return await self.identity_service.resolve_actor(payload.kind, subject_id)
