"""Domain model entities for Whisper."""

from whisper.domain.model.actor import Actor, AdminActor, AnonymousActor, UserActor
from whisper.domain.model.admin import Admin
from whisper.domain.model.follow import Follow
from whisper.domain.model.message import MAX_MESSAGE_LENGTH, Message
from whisper.domain.model.reaction import Reaction
from whisper.domain.model.reply import MAX_REPLY_LENGTH, Reply
from whisper.domain.model.user import MAX_BIO_LENGTH, User

__all__ = [
    "Actor",
    "AdminActor",
    "AnonymousActor",
    "UserActor",
    "User",
    "Admin",
    "Message",
    "Reply",
    "Follow",
    "Reaction",
    "MAX_MESSAGE_LENGTH",
    "MAX_REPLY_LENGTH",
    "MAX_BIO_LENGTH",
]
