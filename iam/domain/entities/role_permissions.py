"""
Role Permission Set

Typed view of the JSON stored in workspace_roles.permissions.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..base import utcnow

PERMISSIONS_SCHEMA_VERSION = "1.0"


class PermissionMetadata(BaseModel):
    """Bookkeeping stored next to the permission list"""

    version: str = PERMISSIONS_SCHEMA_VERSION
    created_by: str = "system"
    updated_by: str = "system"
    updated_at: datetime = Field(default_factory=utcnow)
    description: Optional[str] = None


class RolePermissions(BaseModel):
    """Ordered permission list plus metadata"""

    permissions: list[str] = Field(default_factory=list)
    metadata: PermissionMetadata = Field(default_factory=PermissionMetadata)
