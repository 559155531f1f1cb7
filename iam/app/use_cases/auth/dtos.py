"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain, plus the session
snapshot stored in the cache.
"""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from iam.domain.entities import GlobalRole, User, UserProfile, UserStatus, WorkspaceMembership


# ============================================================================
# Commands
# ============================================================================


class SignupCommand(BaseModel):
    """Validated signup intent"""

    email: str
    password: str
    first_name: str
    last_name: str


class LoginCommand(BaseModel):
    """Validated login intent"""

    email: str
    password: str


# ============================================================================
# Session snapshot (cached per issued token)
# ============================================================================


class WorkspaceMembershipTokenData(BaseModel):
    workspace_id: str
    role_name: str
    permissions: List[str]
    status: str


class UserTokenData(BaseModel):
    """Global role + active workspace permissions at login time"""

    global_role: str
    workspace_memberships: List[WorkspaceMembershipTokenData] = []


# ============================================================================
# Response DTOs
# ============================================================================


class ProfileInfo(BaseModel):
    first_name: str
    last_name: str
    display_name: Optional[str] = None
    timezone: str
    locale: str


class WorkspaceSummary(BaseModel):
    id: str
    name: str
    slug: str
    status: str


class MembershipInfo(BaseModel):
    """Workspace membership with its role"""

    id: str
    workspace: Optional[WorkspaceSummary] = None
    role_id: str
    role_name: Optional[str] = None
    permissions: List[str] = []
    status: str
    joined_at: Optional[datetime] = None


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    global_role: str
    status: str
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    profile: Optional[ProfileInfo] = None
    workspace_memberships: List[MembershipInfo] = []


class AuthenticatedUser(BaseModel):
    """Identity of a request that passed token validation"""

    id: UUID
    email: str
    global_role: GlobalRole
    status: UserStatus

    @property
    def is_super_admin(self) -> bool:
        return self.global_role == GlobalRole.super_admin


class SignupResponse(BaseModel):
    """Response for signup; no token is issued"""

    message: str
    user: UserInfo


class LoginResponse(BaseModel):
    """Response for login. Both tokens are meant for cookies."""

    access_token: str
    encrypted_token: str
    user: UserInfo


def to_membership_info(membership: WorkspaceMembership) -> MembershipInfo:
    workspace = membership.workspace
    role = membership.role
    return MembershipInfo(
        id=str(membership.id),
        workspace=(
            WorkspaceSummary(
                id=str(workspace.id),
                name=workspace.name,
                slug=workspace.slug,
                status=workspace.status.value,
            )
            if workspace is not None
            else None
        ),
        role_id=str(membership.role_id),
        role_name=role.name if role is not None else None,
        permissions=role.permission_set().permissions if role is not None else [],
        status=membership.status.value,
        joined_at=membership.joined_at,
    )


def to_user_info(
    user: User,
    profile: Optional[UserProfile] = None,
    memberships: Iterable[WorkspaceMembership] = (),
) -> UserInfo:
    """Build UserInfo from explicitly loaded parts (never triggers lazy loads)"""
    return UserInfo(
        id=str(user.id),
        email=user.email,
        global_role=user.global_role.value,
        status=user.status.value,
        last_login_at=user.last_login_at,
        created_at=user.created_at,
        profile=(
            ProfileInfo(
                first_name=profile.first_name,
                last_name=profile.last_name,
                display_name=profile.display_name,
                timezone=profile.timezone,
                locale=profile.locale,
            )
            if profile is not None
            else None
        ),
        workspace_memberships=[to_membership_info(m) for m in memberships],
    )
