"""Reaction domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from whisper.domain.error import AlreadyReactedError
from whisper.domain.model import Actor, Reaction
from whisper.domain.repository import ReactionRepository
from whisper.domain.value import MessageId, ReactionId
from whisper.domain.value.types import ReactionType

from .base import Service
from .message_service import MessageService
from .visibility_service import VisibilityService


class ReactionService(Service):
    """Domain service for reactions on messages."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        message_service: MessageService,
        visibility_service: VisibilityService,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            message_service: Message domain service
            visibility_service: Privilege checks
        """
        self.reaction_repository = reaction_repository
        self.message_service = message_service
        self.visibility_service = visibility_service

    async def add_reaction(
        self,
        message_id: MessageId,
        actor: Actor,
        reaction_type: ReactionType = ReactionType.HEART,
    ) -> Reaction:
        """React to a message.

        Creates the reaction record and atomically increments the message's
        reaction count.

        Args:
            message_id: Message ID
            actor: Acting principal (user or admin)
            reaction_type: Reaction type

        Returns:
            Created reaction

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            MessageNotFoundError: If the message is missing or not readable
            AlreadyReactedError: If the actor already reacted
        """
        with logfire.span(
            "reaction_service.add_reaction",
            message_id=str(message_id),
            actor_kind=actor.kind.value,
        ):
            self.visibility_service.require_authenticated(actor, "react to messages")
            await self.message_service.get_message(message_id, actor)

            reactor = actor.author_ref
            reaction = Reaction(
                id=ReactionId(uuid4()),
                message_id=message_id,
                user_id=reactor.user_id,
                admin_id=reactor.admin_id,
                type=reaction_type,
                created_at=datetime.now(),
            )

            # Raises IntegrityError on a duplicate
            try:
                saved = await self.reaction_repository.save(reaction)
            except IntegrityError:
                logfire.warn(
                    "Duplicate reaction attempt",
                    message_id=str(message_id),
                    reactor_id=str(reactor.identity_id),
                )
                raise AlreadyReactedError(str(message_id))

            await self.message_service.increment_reaction_count(message_id)
            logfire.info("Reaction added", message_id=str(message_id))
            return saved

    async def remove_reaction(self, message_id: MessageId, actor: Actor) -> bool:
        """Remove the actor's reaction from a message.

        Args:
            message_id: Message ID
            actor: Acting principal (user or admin)

        Returns:
            True if a reaction was removed, False if none existed

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
        """
        with logfire.span(
            "reaction_service.remove_reaction",
            message_id=str(message_id),
            actor_kind=actor.kind.value,
        ):
            self.visibility_service.require_authenticated(actor, "remove reactions")

            deleted = await self.reaction_repository.delete_by_reactor_and_message(
                actor.author_ref, message_id
            )
            if deleted:
                await self.message_service.decrement_reaction_count(message_id)
                logfire.info("Reaction removed", message_id=str(message_id))
            else:
                logfire.info("No reaction to remove", message_id=str(message_id))
            return deleted

    async def has_reacted(self, message_id: MessageId, actor: Actor) -> bool:
        """Check whether the actor reacted to a message. Anonymous: False."""
        if actor.author_ref.is_anonymous:
            return False
        reaction = await self.reaction_repository.find_by_reactor_and_message(
            actor.author_ref, message_id
        )
        return reaction is not None
