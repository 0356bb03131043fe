"""Visibility and moderation rules.

Persisted states of a message:

    private_pending --promote--> public

``public`` is terminal. Read access is checked separately from the state
machine: public messages are readable by anyone, private ones only by the
recipient admin or a super-admin.
"""

import logfire

from whisper.domain.error import (
    AlreadyPublicError,
    AuthenticationRequiredError,
    InvalidTransitionError,
    NotAuthorizedError,
)
from whisper.domain.model import Actor, Admin, AdminActor, AnonymousActor, Message
from whisper.domain.value.types import Visibility

from .base import Service

# Allowed persisted transitions: source -> targets
TRANSITIONS: dict[Visibility, frozenset[Visibility]] = {
    Visibility.PRIVATE_PENDING: frozenset({Visibility.PUBLIC}),
    Visibility.PUBLIC: frozenset(),
}


class VisibilityService(Service):
    """Domain service for visibility transitions and privilege checks."""

    def transition(self, message: Message, target: Visibility) -> Visibility:
        """Validate a visibility change for a message.

        Args:
            message: Message being changed
            target: Requested visibility

        Returns:
            The new visibility

        Raises:
            AlreadyPublicError: If the message is already public and public
                was requested
            InvalidTransitionError: For any other disallowed change
        """
        source = message.visibility
        if target in TRANSITIONS[source]:
            return target
        if source == Visibility.PUBLIC and target == Visibility.PUBLIC:
            raise AlreadyPublicError(str(message.id))
        raise InvalidTransitionError(source.value, target.value)

    def can_read(self, actor: Actor, message: Message) -> bool:
        """Check whether an actor may read a message.

        Args:
            actor: Acting principal
            message: Message to read

        Returns:
            True if the message is public, or the actor is its recipient
            admin or a super-admin
        """
        if message.is_public:
            return True
        if not isinstance(actor, AdminActor):
            return False
        return (
            actor.admin.is_super_admin
            or actor.admin.display_name == message.recipient
        )

    def require_admin(self, actor: Actor, action: str) -> Admin:
        """Require an admin actor.

        Args:
            actor: Acting principal
            action: Description of the attempted action, for the error

        Returns:
            The acting admin

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is not an admin
        """
        if isinstance(actor, AnonymousActor):
            logfire.warn("Anonymous moderation attempt", action=action)
            raise AuthenticationRequiredError(action)
        if not isinstance(actor, AdminActor):
            logfire.warn("Non-admin moderation attempt", action=action)
            raise NotAuthorizedError(action)
        return actor.admin

    def require_super_admin(self, actor: Actor, action: str) -> Admin:
        """Require a super-admin actor.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is not a super-admin
        """
        admin = self.require_admin(actor, action)
        if not admin.is_super_admin:
            logfire.warn(
                "Super-admin action denied", action=action, admin_id=str(admin.id)
            )
            raise NotAuthorizedError(action, reason="super-admin privileges required")
        return admin

    def require_authenticated(self, actor: Actor, action: str) -> None:
        """Require a signed-in user or admin.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
        """
        if isinstance(actor, AnonymousActor):
            raise AuthenticationRequiredError(action)
