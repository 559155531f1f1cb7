from abc import ABC, abstractmethod
from uuid import UUID

from iam.domain.entities import Workspace, WorkspaceMembership, WorkspaceRole


class IWorkspaceRepository(ABC):
    """Workspace repository interface - application layer"""

    @abstractmethod
    async def exists_by_slug(self, slug: str) -> bool:
        """Check whether a workspace already uses this slug"""
        pass

    @abstractmethod
    async def exists_by_id(self, workspace_id: UUID) -> bool:
        """Check whether a workspace exists"""
        pass

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        pass

    @abstractmethod
    async def create_role(self, role: WorkspaceRole) -> WorkspaceRole:
        """Create a role scoped to a workspace"""
        pass

    @abstractmethod
    async def create_membership(self, membership: WorkspaceMembership) -> WorkspaceMembership:
        """Create a membership"""
        pass
