"""Account use cases."""

from .delete_account import DeleteAccountRequest, DeleteAccountUseCase
from .get_profile import GetProfileRequest, GetProfileResponse, GetProfileUseCase
from .list_account_messages import (
    ListAccountMessagesRequest,
    ListAccountMessagesResponse,
    ListAccountMessagesUseCase,
)
from .list_recipients import ListRecipientsResponse, ListRecipientsUseCase
from .search_accounts import (
    SearchAccountsRequest,
    SearchAccountsResponse,
    SearchAccountsUseCase,
)
from .set_status import SetStatusRequest, SetStatusUseCase
from .set_verification import SetVerificationRequest, SetVerificationUseCase
from .update_profile import UpdateProfileRequest, UpdateProfileUseCase

__all__ = [
    "DeleteAccountRequest",
    "DeleteAccountUseCase",
    "GetProfileRequest",
    "GetProfileResponse",
    "GetProfileUseCase",
    "ListAccountMessagesRequest",
    "ListAccountMessagesResponse",
    "ListAccountMessagesUseCase",
    "ListRecipientsResponse",
    "ListRecipientsUseCase",
    "SearchAccountsRequest",
    "SearchAccountsResponse",
    "SearchAccountsUseCase",
    "SetStatusRequest",
    "SetStatusUseCase",
    "SetVerificationRequest",
    "SetVerificationUseCase",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
]
