from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from iam.domain.entities import (
    AuthProviderKind,
    User,
    UserAuthProvider,
    UserProfile,
)


class IUserRepository(ABC):
    """User repository interface - application layer

    Lookups return None for missing rows and never return soft-deleted users.
    Store failures propagate as exceptions.
    """

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether any user (any status) holds this email"""
        pass

    @abstractmethod
    async def exists_by_id(self, user_id: UUID) -> bool:
        """Check whether a non-deleted user exists"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_with_profile(self, user_id: UUID) -> Optional[User]:
        """Get user with profile eagerly loaded"""
        pass

    @abstractmethod
    async def get_with_workspaces(self, user_id: UUID) -> Optional[User]:
        """Get user with profile, memberships, their workspaces and roles"""
        pass

    @abstractmethod
    async def create_with_auth(
        self, user: User, profile: UserProfile, auth_provider: UserAuthProvider
    ) -> User:
        """Create user, profile and auth provider inside the current transaction"""
        pass

    @abstractmethod
    async def update_last_login(self, user_id: UUID, logged_in_at: datetime) -> None:
        """Stamp last_login_at"""
        pass

    @abstractmethod
    async def soft_delete(self, user_id: UUID) -> bool:
        """Mark user as deleted. Returns True if a row was changed."""
        pass

    @abstractmethod
    async def get_auth_provider(
        self, user_id: UUID, provider: AuthProviderKind
    ) -> Optional[UserAuthProvider]:
        """Get the user's row for one provider"""
        pass

    @abstractmethod
    async def update_auth_provider(self, auth_provider: UserAuthProvider) -> UserAuthProvider:
        """Update existing auth provider"""
        pass
