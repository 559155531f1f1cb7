from .dtos import (
    AuthenticatedUser,
    LoginCommand,
    LoginResponse,
    MembershipInfo,
    ProfileInfo,
    SignupCommand,
    SignupResponse,
    UserInfo,
    UserTokenData,
    WorkspaceMembershipTokenData,
    WorkspaceSummary,
    to_membership_info,
    to_user_info,
)
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .signup_use_case import SignupUseCase
from .token_data_service import DEFAULT_TOKEN_DATA_TTL, TokenDataService
from .validate_token_use_case import ValidateTokenUseCase

__all__ = [
    "AuthenticatedUser",
    "SignupCommand",
    "SignupResponse",
    "LoginCommand",
    "LoginResponse",
    "UserInfo",
    "ProfileInfo",
    "MembershipInfo",
    "WorkspaceSummary",
    "UserTokenData",
    "WorkspaceMembershipTokenData",
    "to_user_info",
    "to_membership_info",
    "TokenDataService",
    "DEFAULT_TOKEN_DATA_TTL",
    "SignupUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "ValidateTokenUseCase",
]
