"""
WorkspaceRole Entity

Named, workspace-scoped permission bundle.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import WorkspaceStatus
from .role_permissions import RolePermissions

if TYPE_CHECKING:
    from .membership import WorkspaceMembership
    from .workspace import Workspace

ADMIN_ROLE_NAME = "admin"
PERMISSION_ALL = "all"


class WorkspaceRole(SQLModel, table=True):
    """
    WorkspaceRole entity - belongs to exactly one workspace.

    Business Rules:
    - Every workspace gets one admin role with permissions ["all"] at creation
    - Permissions are persisted as JSON and read back as RolePermissions
    """

    __tablename__ = "workspace_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(
        foreign_key="workspaces.id", nullable=False, index=True, ondelete="CASCADE"
    )

    name: str = Field(max_length=100)
    description: Optional[str] = None
    permissions: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    status: WorkspaceStatus = Field(default=WorkspaceStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    workspace: "Workspace" = Relationship(back_populates="roles")
    memberships: list["WorkspaceMembership"] = Relationship(back_populates="role")

    __table_args__ = (Index("idx_workspace_role_status", "status"),)

    def permission_set(self) -> RolePermissions:
        return RolePermissions.model_validate(self.permissions or {})

    @staticmethod
    def dump_permissions(permission_set: RolePermissions) -> dict:
        return permission_set.model_dump(mode="json")
