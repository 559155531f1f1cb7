"""
User Entity

Identity root: one row per person, extended by a profile and one or more
auth providers, and linked to workspaces through memberships.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import GlobalRole, UserStatus

if TYPE_CHECKING:
    from .membership import WorkspaceMembership
    from .user_auth_provider import UserAuthProvider
    from .user_profile import UserProfile


class User(SQLModel, table=True):
    """
    User entity - identity root for authentication and authorization.

    Business Rules:
    - Email is unique (case-sensitive) and immutable once created
    - Created together with a UserProfile and a local UserAuthProvider
    - Deletion is a soft delete: status becomes "deleted"
    - last_login_at is refreshed opportunistically on login
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, unique=True, max_length=20)

    email_verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    phone_verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    global_role: GlobalRole = Field(default=GlobalRole.customer)
    status: UserStatus = Field(default=UserStatus.pending)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    profile: Optional["UserProfile"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"uselist": False, "cascade": "all, delete-orphan"},
    )
    auth_providers: list["UserAuthProvider"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    workspace_memberships: list["WorkspaceMembership"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"foreign_keys": "[WorkspaceMembership.user_id]"},
    )

    __table_args__ = (
        Index("idx_user_status", "status"),
        Index("idx_user_global_role", "global_role"),
    )
