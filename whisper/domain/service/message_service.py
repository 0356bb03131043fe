"""Message domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from whisper.domain.error import (
    AlreadyPublicError,
    MessageNotFoundError,
    NotAuthorizedError,
    RecipientRequiredError,
    UnknownRecipientError,
    ValidationError,
)
from whisper.domain.model import MAX_MESSAGE_LENGTH, Actor, AnonymousActor, Message
from whisper.domain.repository import (
    AdminRepository,
    MessageRepository,
    ReactionRepository,
    ReplyRepository,
)
from whisper.domain.value import MessageId
from whisper.domain.value.types import AuthorRef, Category, Visibility

from .base import Service
from .visibility_service import VisibilityService


class MessageService(Service):
    """Domain service for message operations."""

    def __init__(
        self,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        reaction_repository: ReactionRepository,
        admin_repository: AdminRepository,
        visibility_service: VisibilityService,
    ) -> None:
        """Initialize message service.

        Args:
            message_repository: Message repository
            reply_repository: Reply repository (cascading delete)
            reaction_repository: Reaction repository (cascading delete)
            admin_repository: Admin repository (recipient lookup)
            visibility_service: Visibility rules
        """
        self.message_repository = message_repository
        self.reply_repository = reply_repository
        self.reaction_repository = reaction_repository
        self.admin_repository = admin_repository
        self.visibility_service = visibility_service

    async def create_message(
        self,
        category: Category | str,
        content: str,
        is_public: bool,
        actor: Actor,
        recipient: Optional[str] = None,
        sender_name: Optional[str] = None,
        media_link: Optional[str] = None,
    ) -> Message:
        """Create a public message or a private message to a moderator.

        Signed-in authors are named by their account; the client-supplied
        sender name only applies to anonymous posts.

        Args:
            category: Message category
            content: Message body
            is_public: Whether the message is posted publicly
            actor: Acting principal
            recipient: Admin display name (required for private messages)
            sender_name: Free-text label for anonymous posts
            media_link: Optional external link

        Returns:
            Created message

        Raises:
            ValidationError: If content is blank or too long, the category is
                unknown or the media link is not an http(s) URL
            RecipientRequiredError: If a private message names no recipient
            UnknownRecipientError: If the recipient is not an active admin
        """
        with logfire.span(
            "message_service.create_message",
            category=str(category),
            is_public=is_public,
            author_kind=actor.kind.value,
        ):
            category = _parse_category(category)
            content = content.strip()
            if not content:
                raise ValidationError("Message content cannot be blank")
            if len(content) > MAX_MESSAGE_LENGTH:
                raise ValidationError(
                    f"Message content cannot exceed {MAX_MESSAGE_LENGTH} characters"
                )
            media_link = _parse_media_link(media_link)

            if is_public:
                recipient = None
            else:
                recipient = (recipient or "").strip()
                if not recipient:
                    logfire.warn("Private message without recipient")
                    raise RecipientRequiredError()
                admin = await self.admin_repository.find_by_display_name(recipient)
                if admin is None or not admin.is_active:
                    logfire.warn("Unknown recipient", recipient=recipient)
                    raise UnknownRecipientError(recipient)

            if isinstance(actor, AnonymousActor):
                sender_name = (sender_name or "").strip() or None
            else:
                sender_name = actor.label

            author = actor.author_ref
            message = Message(
                id=MessageId(uuid4()),
                category=category,
                content=content,
                media_link=media_link,
                is_public=is_public,
                recipient=recipient,
                sender_name=sender_name,
                user_id=author.user_id,
                admin_id=author.admin_id,
                created_at=datetime.now(),
            )

            saved = await self.message_repository.save(message)
            logfire.info(
                "Message created",
                message_id=str(saved.id),
                category=category.value,
                visibility=saved.visibility.value,
            )
            return saved

    async def list_public(
        self,
        category: Optional[Category] = None,
        query: Optional[str] = None,
    ) -> list[Message]:
        """List public messages, newest first.

        Args:
            category: Optional category filter
            query: Optional case-insensitive search over content, category
                and sender name

        Returns:
            Public messages
        """
        query = (query or "").strip() or None
        with logfire.span(
            "message_service.list_public",
            category=category.value if category else None,
            query=query,
        ):
            messages = await self.message_repository.find_public(
                category=category, query=query
            )
            logfire.info("Public messages listed", count=len(messages))
            return messages

    async def list_public_by_author(self, author: AuthorRef) -> list[Message]:
        """List an author's public messages, newest first.

        Private messages never appear here, whoever is asking.
        """
        with logfire.span(
            "message_service.list_public_by_author", author_kind=author.kind.value
        ):
            messages = await self.message_repository.find_public_by_author(author)
            logfire.info("Author messages listed", count=len(messages))
            return messages

    async def list_private_for_recipient(
        self, recipient: str, acting: Actor
    ) -> list[Message]:
        """List private messages addressed to a moderator, newest first.

        An admin may read their own inbox; a super-admin may read any inbox.

        Args:
            recipient: Admin display name
            acting: Acting principal

        Returns:
            Private messages for the recipient

        Raises:
            NotAuthorizedError: If the actor may not read this inbox
        """
        with logfire.span(
            "message_service.list_private_for_recipient", recipient=recipient
        ):
            admin = self.visibility_service.require_admin(acting, "read private inbox")
            if admin.display_name != recipient and not admin.is_super_admin:
                logfire.warn(
                    "Foreign inbox access denied",
                    admin_id=str(admin.id),
                    recipient=recipient,
                )
                raise NotAuthorizedError(
                    "read private inbox", reason="inbox belongs to another admin"
                )

            messages = await self.message_repository.find_private_by_recipient(
                recipient
            )
            logfire.info(
                "Private messages listed", recipient=recipient, count=len(messages)
            )
            return messages

    async def get_message(self, message_id: MessageId, acting: Actor) -> Message:
        """Get a message the actor is allowed to read.

        Private messages the actor cannot read are reported as missing.

        Args:
            message_id: Message ID
            acting: Acting principal

        Returns:
            The message

        Raises:
            MessageNotFoundError: If missing or not readable by the actor
        """
        with logfire.span("message_service.get_message", message_id=str(message_id)):
            message = await self.message_repository.find_by_id(message_id)
            if message is None or not self.visibility_service.can_read(
                acting, message
            ):
                logfire.warn("Message not found", message_id=str(message_id))
                raise MessageNotFoundError(str(message_id))
            return message

    async def promote_to_public(self, message_id: MessageId, acting: Actor) -> Message:
        """Make a private message public. Irreversible.

        Args:
            message_id: Message ID
            acting: Acting principal (must be an admin)

        Returns:
            The promoted message

        Raises:
            NotAuthorizedError: If the actor is not an admin
            MessageNotFoundError: If the message does not exist or is a
                private message addressed to another admin
            AlreadyPublicError: If the message is already public, including
                when a concurrent promotion won
        """
        with logfire.span(
            "message_service.promote_to_public", message_id=str(message_id)
        ):
            admin = self.visibility_service.require_admin(acting, "promote messages")

            message = await self.message_repository.find_by_id(message_id)
            if message is None or not self.visibility_service.can_read(
                acting, message
            ):
                # Private messages of other admins are reported as missing
                logfire.warn("Promote on missing message", message_id=str(message_id))
                raise MessageNotFoundError(str(message_id))

            self.visibility_service.transition(message, Visibility.PUBLIC)

            promoted = await self.message_repository.mark_public(message_id)
            if promoted is None:
                # Another promotion won between the read and the update
                logfire.warn("Concurrent promotion lost", message_id=str(message_id))
                raise AlreadyPublicError(str(message_id))

            logfire.info(
                "Message promoted",
                message_id=str(message_id),
                admin_id=str(admin.id),
            )
            return promoted

    async def delete_message(self, message_id: MessageId, acting: Actor) -> None:
        """Delete a message with all of its replies and reactions.

        Args:
            message_id: Message ID
            acting: Acting principal (must be an admin)

        Raises:
            NotAuthorizedError: If the actor is not an admin
            MessageNotFoundError: If the message does not exist or is a
                private message addressed to another admin
        """
        with logfire.span("message_service.delete_message", message_id=str(message_id)):
            admin = self.visibility_service.require_admin(acting, "delete messages")

            message = await self.message_repository.find_by_id(message_id)
            if message is None or not self.visibility_service.can_read(
                acting, message
            ):
                logfire.warn("Delete on missing message", message_id=str(message_id))
                raise MessageNotFoundError(str(message_id))

            replies = await self.reply_repository.delete_by_message(message_id)
            reactions = await self.reaction_repository.delete_by_message(message_id)
            await self.message_repository.delete(message_id)

            logfire.info(
                "Message deleted",
                message_id=str(message_id),
                admin_id=str(admin.id),
                replies_removed=replies,
                reactions_removed=reactions,
            )

    async def increment_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically increase the cached reply count."""
        with logfire.span(
            "message_service.increment_reply_count", message_id=str(message_id)
        ):
            await self.message_repository.increment_reply_count(message_id, by)

    async def decrement_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically decrease the cached reply count (minimum 0)."""
        with logfire.span(
            "message_service.decrement_reply_count", message_id=str(message_id)
        ):
            await self.message_repository.decrement_reply_count(message_id, by)

    async def increment_reaction_count(self, message_id: MessageId) -> None:
        with logfire.span(
            "message_service.increment_reaction_count", message_id=str(message_id)
        ):
            await self.message_repository.increment_reaction_count(message_id)

    async def decrement_reaction_count(self, message_id: MessageId) -> None:
        with logfire.span(
            "message_service.decrement_reaction_count", message_id=str(message_id)
        ):
            await self.message_repository.decrement_reaction_count(message_id)


def _parse_category(category: Category | str) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise ValidationError(f"Unknown category: {category}") from None


def _parse_media_link(media_link: Optional[str]) -> Optional[str]:
    media_link = (media_link or "").strip()
    if not media_link:
        return None
    if not media_link.startswith(("http://", "https://")):
        raise ValidationError("Media link must be an http(s) URL")
    return media_link
