"""Authentication use cases."""

from .check_username import CheckUsernameResponse, CheckUsernameUseCase
from .create_admin import CreateAdminRequest, CreateAdminUseCase
from .get_current_actor import GetCurrentActorUseCase
from .login import LoginRequest, LoginResponse, LoginUseCase
from .register import RegisterRequest, RegisterResponse, RegisterUseCase

__all__ = [
    "CheckUsernameResponse",
    "CheckUsernameUseCase",
    "CreateAdminRequest",
    "CreateAdminUseCase",
    "GetCurrentActorUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "RegisterRequest",
    "RegisterResponse",
    "RegisterUseCase",
]
