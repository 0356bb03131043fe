"""Follow repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from uuid import UUID

from whisper.domain.model.follow import Follow
from whisper.domain.value import UserId
from whisper.domain.value.types import ActorKind


class FollowRepository(ABC):
    """Repository for Follow edges."""

    @abstractmethod
    async def find(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> Optional[Follow]:
        """Find an edge.

        Args:
            follower_id: Following user
            followee_kind: Kind of the followed account
            followee_id: ID of the followed account

        Returns:
            The edge if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, follow: Follow) -> Follow:
        """Save a new edge.

        Args:
            follow: The edge to save

        Returns:
            The saved edge

        Raises:
            IntegrityError: If the edge already exists
        """
        pass

    @abstractmethod
    async def delete(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> bool:
        """Delete an edge.

        Returns:
            True if an edge was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_followers(self, followee_kind: ActorKind, followee_id: UUID) -> int:
        """Count edges pointing at an account."""
        pass

    @abstractmethod
    async def count_following(self, follower_id: UserId) -> int:
        """Count edges leaving a user."""
        pass

    @abstractmethod
    async def follower_counts(self, followee_kind: ActorKind) -> Dict[UUID, int]:
        """Count followers for every followed account of one kind.

        Args:
            followee_kind: User or admin

        Returns:
            Mapping of account ID to follower count
        """
        pass

    @abstractmethod
    async def delete_by_account(self, kind: ActorKind, account_id: UUID) -> int:
        """Delete every edge that touches an account, in either direction.

        Args:
            kind: User or admin
            account_id: The account ID

        Returns:
            Number of edges deleted
        """
        pass
