from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class CreateWorkspaceCommand(BaseModel):
    acting_user_id: UUID
    name: str
    description: Optional[str] = None


class WorkspaceRoleInfo(BaseModel):
    id: str
    name: str
    permissions: List[str]


class WorkspaceResponse(BaseModel):
    """Created workspace with the owner's role and membership"""

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    owner_id: str
    status: str
    created_at: datetime
    admin_role: WorkspaceRoleInfo
    membership_id: str
