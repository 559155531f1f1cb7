from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from iam.app.repositories.workspace_repository import IWorkspaceRepository
from iam.domain.entities import Workspace, WorkspaceMembership, WorkspaceRole


class WorkspaceRepository(IWorkspaceRepository):
    """Workspace, role and membership persistence using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_by_slug(self, slug: str) -> bool:
        stmt = select(func.count()).select_from(Workspace).where(Workspace.slug == slug)
        result = await self.session.exec(stmt)
        return result.one() > 0

    async def exists_by_id(self, workspace_id: UUID) -> bool:
        stmt = select(func.count()).select_from(Workspace).where(Workspace.id == workspace_id)
        result = await self.session.exec(stmt)
        return result.one() > 0

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        self.session.add(workspace)
        await self.session.flush()
        return workspace

    async def create_role(self, role: WorkspaceRole) -> WorkspaceRole:
        self.session.add(role)
        await self.session.flush()
        return role

    async def create_membership(self, membership: WorkspaceMembership) -> WorkspaceMembership:
        self.session.add(membership)
        await self.session.flush()
        return membership
