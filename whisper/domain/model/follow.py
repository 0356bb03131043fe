"""Follow edge.

Only users follow; both users and admins can be followed.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from whisper.domain.model.common import DomainModel
from whisper.domain.value import FollowId, UserId
from whisper.domain.value.types import ActorKind


class Follow(DomainModel):
    """Directed follow edge from a user to a user or admin.

    Unique on (follower_id, followee_kind, followee_id).
    """

    id: FollowId
    follower_id: UserId
    followee_kind: ActorKind
    followee_id: UUID  # UserId or AdminId depending on followee_kind
    created_at: datetime = Field(default_factory=datetime.now)
