"""Acting principal of a request.

The actor is resolved once from the session and passed to domain services,
which switch on ``kind``.
"""

from typing import Literal, Optional, Union

from whisper.domain.model.admin import Admin
from whisper.domain.model.common import DomainModel
from whisper.domain.model.user import User
from whisper.domain.value.types import ActorKind, AuthorRef


class AnonymousActor(DomainModel):
    """Visitor without a session."""

    kind: Literal[ActorKind.ANONYMOUS] = ActorKind.ANONYMOUS

    @property
    def author_ref(self) -> AuthorRef:
        return AuthorRef.anonymous()

    @property
    def label(self) -> Optional[str]:
        return None


class UserActor(DomainModel):
    """Signed-in Silent Messenger."""

    kind: Literal[ActorKind.USER] = ActorKind.USER
    user: User

    @property
    def author_ref(self) -> AuthorRef:
        return AuthorRef.of_user(self.user.id)

    @property
    def label(self) -> Optional[str]:
        return self.user.label


class AdminActor(DomainModel):
    """Signed-in Whisper Listener."""

    kind: Literal[ActorKind.ADMIN] = ActorKind.ADMIN
    admin: Admin

    @property
    def author_ref(self) -> AuthorRef:
        return AuthorRef.of_admin(self.admin.id)

    @property
    def label(self) -> Optional[str]:
        return self.admin.label


Actor = Union[AnonymousActor, UserActor, AdminActor]
