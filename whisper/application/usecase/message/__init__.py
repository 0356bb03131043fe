"""Message use cases."""

from .create_message import CreateMessageRequest, CreateMessageUseCase
from .delete_message import DeleteMessageRequest, DeleteMessageUseCase
from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ReplyNodeResponse,
)
from .list_categories import ListCategoriesResponse, ListCategoriesUseCase
from .list_private_messages import (
    ListPrivateMessagesRequest,
    ListPrivateMessagesResponse,
    ListPrivateMessagesUseCase,
)
from .list_public_messages import (
    ListPublicMessagesRequest,
    ListPublicMessagesResponse,
    ListPublicMessagesUseCase,
)
from .promote_message import PromoteMessageRequest, PromoteMessageUseCase

__all__ = [
    "CreateMessageRequest",
    "CreateMessageUseCase",
    "DeleteMessageRequest",
    "DeleteMessageUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "ListPrivateMessagesRequest",
    "ListPrivateMessagesResponse",
    "ListPrivateMessagesUseCase",
    "ListPublicMessagesRequest",
    "ListPublicMessagesResponse",
    "ListPublicMessagesUseCase",
    "PromoteMessageRequest",
    "PromoteMessageUseCase",
    "ReplyNodeResponse",
]
