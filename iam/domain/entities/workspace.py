"""
Workspace Entity

A tenant container. Created only by the workspace provisioning flow.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import WorkspaceStatus

if TYPE_CHECKING:
    from .membership import WorkspaceMembership
    from .workspace_role import WorkspaceRole


class Workspace(SQLModel, table=True):
    """
    Workspace entity - isolated tenant boundary.

    Business Rules:
    - Slug is URL-safe, derived from the name and unique (DB constraint)
    - One user may own many workspaces
    - Always created together with its admin role and owner membership
    """

    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    settings: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    status: WorkspaceStatus = Field(default=WorkspaceStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    roles: list["WorkspaceRole"] = Relationship(back_populates="workspace")
    memberships: list["WorkspaceMembership"] = Relationship(back_populates="workspace")

    __table_args__ = (Index("idx_workspace_status", "status"),)
