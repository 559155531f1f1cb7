"""
WorkspaceMembership Entity

Links User to Workspace through a WorkspaceRole.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import MembershipStatus

if TYPE_CHECKING:
    from .user import User
    from .workspace import Workspace
    from .workspace_role import WorkspaceRole


class WorkspaceMembership(SQLModel, table=True):
    """
    WorkspaceMembership entity - user to workspace through a role.

    Business Rules:
    - (user_id, workspace_id) must be unique
    - The workspace owner holds an active membership on the admin role,
      joined at the workspace creation time
    - Only active memberships feed the cached permission snapshot
    """

    __tablename__ = "user_workspace_memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE")
    workspace_id: UUID = Field(
        foreign_key="workspaces.id", nullable=False, index=True, ondelete="CASCADE"
    )
    role_id: UUID = Field(foreign_key="workspace_roles.id", nullable=False, ondelete="RESTRICT")

    status: MembershipStatus = Field(default=MembershipStatus.pending)
    invited_by: Optional[UUID] = Field(default=None, foreign_key="users.id")
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    user: "User" = Relationship(
        back_populates="workspace_memberships",
        sa_relationship_kwargs={"foreign_keys": "[WorkspaceMembership.user_id]"},
    )
    workspace: "Workspace" = Relationship(back_populates="memberships")
    role: "WorkspaceRole" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index("idx_membership_user_workspace", "user_id", "workspace_id", unique=True),
        Index("idx_membership_status", "status"),
    )
