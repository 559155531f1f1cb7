"""
IAM Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuthProviderKind,
    GlobalRole,
    MembershipStatus,
    UserStatus,
    WorkspaceStatus,
)

# Export all entities
from .user import User
from .user_profile import UserProfile
from .user_auth_provider import UserAuthProvider
from .workspace import Workspace
from .role_permissions import PermissionMetadata, RolePermissions
from .workspace_role import ADMIN_ROLE_NAME, PERMISSION_ALL, WorkspaceRole
from .membership import WorkspaceMembership

__all__ = [
    # Enums
    "AuthProviderKind",
    "GlobalRole",
    "MembershipStatus",
    "UserStatus",
    "WorkspaceStatus",
    # Entities
    "User",
    "UserProfile",
    "UserAuthProvider",
    "Workspace",
    "WorkspaceRole",
    "WorkspaceMembership",
    # Value objects
    "PermissionMetadata",
    "RolePermissions",
    "ADMIN_ROLE_NAME",
    "PERMISSION_ALL",
]
