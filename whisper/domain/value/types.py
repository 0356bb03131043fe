"""Domain value objects for Whisper.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import field_validator, model_validator

from whisper.domain.error import ConflictingIdentityError, ValidationError
from whisper.domain.value.common import RootValueObject, ValueObject
from whisper.domain.value.identifiers import AdminId, UserId


class ActorKind(str, Enum):
    """Kind of actor that can author content or act on it."""

    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


class AdminRole(str, Enum):
    """Role held by a Whisper Listener account."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    SUPPORT = "support"
    COMMUNITY_MANAGER = "community_manager"
    SUPER_ADMIN = "super_admin"


class Category(str, Enum):
    """Message category.

    The set is fixed; clients render each with its own colour.
    """

    ANYTHING = "Anything"
    LOVE = "Love"
    ADVICE = "Advice"
    CONFESSION = "Confession"
    RANT = "Rant"
    REFLECTION = "Reflection"
    WRITING = "Writing"

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]


_CATEGORY_DESCRIPTIONS = {
    Category.ANYTHING: "General thoughts and conversations",
    Category.LOVE: "Matters of the heart and relationships",
    Category.ADVICE: "Seeking guidance and wisdom",
    Category.CONFESSION: "Personal revelations and admissions",
    Category.RANT: "Expressing frustration and venting",
    Category.REFLECTION: "Thoughtful contemplation and insights",
    Category.WRITING: "Creative writing and literary expression",
}


class Visibility(str, Enum):
    """Persisted visibility states of a message.

    A draft only exists on the client, so it has no member here.
    PRIVATE_PENDING may move to PUBLIC; PUBLIC is terminal.
    """

    PRIVATE_PENDING = "private_pending"
    PUBLIC = "public"


class ReactionType(str, Enum):
    """Type of reaction."""

    HEART = "heart"


class LeaderboardMetric(str, Enum):
    """Metric a leaderboard is ranked by."""

    MESSAGES = "messages"
    REPLIES = "replies"
    REACTIONS = "reactions"
    FOLLOWERS = "followers"


class Username(RootValueObject[str]):
    """Login name shared by the user and admin namespaces.

    3-30 characters: letters, digits, underscore, dot or hyphen.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_.-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_', '.' or '-'"
            ) from None
        return v

    @classmethod
    def parse(cls, value: str) -> "Username":
        """Build a username, reporting bad input as a domain ValidationError."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "Username must be 3-30 characters of letters, digits, '_', '.' or '-'"
            )


class AuthorRef(ValueObject):
    """Attribution of a piece of content.

    Exactly one of three shapes:
    - anonymous: no ids
    - user: user_id only
    - admin: admin_id only
    """

    kind: ActorKind
    user_id: Optional[UserId] = None
    admin_id: Optional[AdminId] = None

    @model_validator(mode="after")
    def validate_shape(self) -> "AuthorRef":
        """Validate that the ids match the kind."""
        expected = {
            ActorKind.ANONYMOUS: (False, False),
            ActorKind.USER: (True, False),
            ActorKind.ADMIN: (False, True),
        }[self.kind]
        if (self.user_id is not None, self.admin_id is not None) != expected:
            raise ValueError(f"Ids do not match author kind {self.kind.value}")
        return self

    @classmethod
    def anonymous(cls) -> "AuthorRef":
        return cls(kind=ActorKind.ANONYMOUS)

    @classmethod
    def of_user(cls, user_id: UserId) -> "AuthorRef":
        return cls(kind=ActorKind.USER, user_id=user_id)

    @classmethod
    def of_admin(cls, admin_id: AdminId) -> "AuthorRef":
        return cls(kind=ActorKind.ADMIN, admin_id=admin_id)

    @classmethod
    def resolve(
        cls, user_id: Optional[UserId], admin_id: Optional[AdminId]
    ) -> "AuthorRef":
        """Resolve a pair of optional ids to a single attribution.

        Args:
            user_id: Owning user ID, if any
            admin_id: Owning admin ID, if any

        Returns:
            The author reference

        Raises:
            ConflictingIdentityError: If both ids are set
        """
        if user_id is not None and admin_id is not None:
            raise ConflictingIdentityError(str(user_id), str(admin_id))
        if user_id is not None:
            return cls.of_user(user_id)
        if admin_id is not None:
            return cls.of_admin(admin_id)
        return cls.anonymous()

    @property
    def is_anonymous(self) -> bool:
        return self.kind == ActorKind.ANONYMOUS

    @property
    def identity_id(self) -> Optional[UserId | AdminId]:
        """The id of the attributed account, or None when anonymous."""
        return self.user_id if self.user_id is not None else self.admin_id
