from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from iam.app.repositories.user_repository import IUserRepository
from iam.domain.entities import (
    AuthProviderKind,
    User,
    UserAuthProvider,
    UserProfile,
    UserStatus,
    WorkspaceMembership,
)


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _live_users(self):
        return select(User).where(User.status != UserStatus.deleted)

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(func.count()).select_from(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one() > 0

    async def exists_by_id(self, user_id: UUID) -> bool:
        stmt = (
            select(func.count())
            .select_from(User)
            .where(User.id == user_id, User.status != UserStatus.deleted)
        )
        result = await self.session.exec(stmt)
        return result.one() > 0

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = self._live_users().where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = self._live_users().where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_with_profile(self, user_id: UUID) -> Optional[User]:
        stmt = (
            self._live_users()
            .where(User.id == user_id)
            .options(selectinload(User.profile))
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_with_workspaces(self, user_id: UUID) -> Optional[User]:
        stmt = (
            self._live_users()
            .where(User.id == user_id)
            .options(
                selectinload(User.profile),
                selectinload(User.workspace_memberships).selectinload(
                    WorkspaceMembership.workspace
                ),
                selectinload(User.workspace_memberships).selectinload(WorkspaceMembership.role),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create_with_auth(
        self, user: User, profile: UserProfile, auth_provider: UserAuthProvider
    ) -> User:
        """Insert the three rows in one flush; the caller owns the commit"""
        profile.user_id = user.id
        auth_provider.user_id = user.id
        self.session.add(user)
        self.session.add(profile)
        self.session.add(auth_provider)
        await self.session.flush()
        return user

    async def update_last_login(self, user_id: UUID, logged_in_at: datetime) -> None:
        stmt = update(User).where(User.id == user_id).values(last_login_at=logged_in_at)
        await self.session.execute(stmt)

    async def soft_delete(self, user_id: UUID) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.status != UserStatus.deleted)
            .values(status=UserStatus.deleted)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def get_auth_provider(
        self, user_id: UUID, provider: AuthProviderKind
    ) -> Optional[UserAuthProvider]:
        stmt = select(UserAuthProvider).where(
            UserAuthProvider.user_id == user_id,
            UserAuthProvider.provider == provider,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update_auth_provider(self, auth_provider: UserAuthProvider) -> UserAuthProvider:
        self.session.add(auth_provider)
        await self.session.flush()
        await self.session.refresh(auth_provider)
        return auth_provider
