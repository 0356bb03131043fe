"""Follow domain service."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from whisper.domain.error import (
    AccountNotFoundError,
    NotAuthorizedError,
    ValidationError,
)
from whisper.domain.model import Actor, Follow, UserActor
from whisper.domain.repository import AdminRepository, FollowRepository, UserRepository
from whisper.domain.value import AdminId, FollowId, UserId
from whisper.domain.value.types import ActorKind

from .base import Service
from .visibility_service import VisibilityService


class FollowService(Service):
    """Domain service for the follow relation.

    Only users follow. Users and admins can be followed.
    """

    def __init__(
        self,
        follow_repository: FollowRepository,
        user_repository: UserRepository,
        admin_repository: AdminRepository,
        visibility_service: VisibilityService,
    ) -> None:
        self.follow_repository = follow_repository
        self.user_repository = user_repository
        self.admin_repository = admin_repository
        self.visibility_service = visibility_service

    async def follow(
        self, actor: Actor, followee_kind: ActorKind, followee_id: UUID
    ) -> Follow:
        """Follow a user or admin. Idempotent.

        Args:
            actor: Acting principal (must be a user)
            followee_kind: Kind of the account to follow
            followee_id: ID of the account to follow

        Returns:
            The new edge, or the existing one if already following

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is an admin
            ValidationError: If a user tries to follow themselves
            AccountNotFoundError: If the followee does not exist
        """
        with logfire.span(
            "follow_service.follow",
            followee_kind=followee_kind.value,
            followee_id=str(followee_id),
        ):
            follower_id = self._require_user(actor, "follow accounts")
            if followee_kind == ActorKind.USER and followee_id == follower_id:
                raise ValidationError("Users cannot follow themselves")
            await self._ensure_exists(followee_kind, followee_id)

            existing = await self.follow_repository.find(
                follower_id, followee_kind, followee_id
            )
            if existing:
                logfire.info("Already following", follower_id=str(follower_id))
                return existing

            follow = Follow(
                id=FollowId(uuid4()),
                follower_id=follower_id,
                followee_kind=followee_kind,
                followee_id=followee_id,
                created_at=datetime.now(),
            )
            try:
                saved = await self.follow_repository.save(follow)
            except IntegrityError:
                # A concurrent request inserted the same edge
                logfire.warn("Concurrent follow", follower_id=str(follower_id))
                raced = await self.follow_repository.find(
                    follower_id, followee_kind, followee_id
                )
                if raced is None:
                    raise
                return raced

            logfire.info(
                "Followed",
                follower_id=str(follower_id),
                followee_kind=followee_kind.value,
                followee_id=str(followee_id),
            )
            return saved

    async def unfollow(
        self, actor: Actor, followee_kind: ActorKind, followee_id: UUID
    ) -> bool:
        """Stop following an account.

        Returns:
            True if an edge was removed, False if there was none
        """
        with logfire.span(
            "follow_service.unfollow",
            followee_kind=followee_kind.value,
            followee_id=str(followee_id),
        ):
            follower_id = self._require_user(actor, "unfollow accounts")
            deleted = await self.follow_repository.delete(
                follower_id, followee_kind, followee_id
            )
            logfire.info("Unfollow", follower_id=str(follower_id), removed=deleted)
            return deleted

    async def is_following(
        self, follower_id: Optional[UserId], followee_kind: ActorKind, followee_id: UUID
    ) -> bool:
        if follower_id is None:
            return False
        edge = await self.follow_repository.find(
            follower_id, followee_kind, followee_id
        )
        return edge is not None

    def _require_user(self, actor: Actor, action: str) -> UserId:
        self.visibility_service.require_authenticated(actor, action)
        if not isinstance(actor, UserActor):
            raise NotAuthorizedError(action, reason="only users can follow")
        return actor.user.id

    async def _ensure_exists(self, kind: ActorKind, account_id: UUID) -> None:
        if kind == ActorKind.USER:
            found = await self.user_repository.find_by_id(UserId(account_id))
        elif kind == ActorKind.ADMIN:
            found = await self.admin_repository.find_by_id(AdminId(account_id))
        else:
            raise ValidationError("Anonymous visitors cannot be followed")
        if found is None:
            raise AccountNotFoundError(kind.value, str(account_id))
