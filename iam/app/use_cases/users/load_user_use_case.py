"""
Load User Use Case

Read side of the user endpoints: the user with profile and workspace
memberships, or just the profile.
"""

from uuid import UUID

from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth.dtos import ProfileInfo, UserInfo, to_user_info
from iam.domain import errors
from iam.domain.result import Result, Return


class LoadUserUseCase:
    """
    Use case for loading the current user.

    Business Rules:
    - Soft-deleted users are not found
    - Memberships of every status are returned, each with workspace and role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def with_workspaces(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_with_workspaces(user_id)
            if user is None:
                return Return.err(errors.USER_NOT_FOUND)

            return Return.ok(
                to_user_info(
                    user,
                    profile=user.profile,
                    memberships=user.workspace_memberships,
                )
            )

    async def profile(self, user_id: UUID) -> Result[ProfileInfo]:
        async with self.uow:
            user = await self.uow.users.get_with_profile(user_id)
            if user is None or user.profile is None:
                return Return.err(errors.USER_NOT_FOUND)

            return Return.ok(to_user_info(user, profile=user.profile).profile)
