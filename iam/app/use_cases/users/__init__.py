"""
User Management Use Cases

All user-related business logic.
"""

from .change_password_use_case import ChangePasswordUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import ChangePasswordCommand, RevokeSessionsResponse
from .load_user_use_case import LoadUserUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase

__all__ = [
    "LoadUserUseCase",
    "DeleteUserUseCase",
    "ChangePasswordUseCase",
    "ChangePasswordCommand",
    "RevokeSessionsUseCase",
    "RevokeSessionsResponse",
]
