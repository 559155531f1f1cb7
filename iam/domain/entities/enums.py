"""
IAM Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"
    pending = "pending"
    deleted = "deleted"


class GlobalRole(str, Enum):
    """Account-wide privilege tier, independent of any workspace"""

    super_admin = "super_admin"
    super_member = "super_member"
    customer = "customer"


class AuthProviderKind(str, Enum):
    """Identity provider backing a UserAuthProvider row"""

    local = "local"
    google = "google"
    facebook = "facebook"
    github = "github"
    apple = "apple"
    microsoft = "microsoft"
    linkedin = "linkedin"
    twitter = "twitter"


class WorkspaceStatus(str, Enum):
    """Workspace and workspace role lifecycle"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"
    deleted = "deleted"


class MembershipStatus(str, Enum):
    """Membership status"""

    active = "active"
    inactive = "inactive"
    pending = "pending"
    rejected = "rejected"
    suspended = "suspended"
