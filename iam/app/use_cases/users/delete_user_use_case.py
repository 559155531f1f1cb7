import logging
from uuid import UUID

from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth.token_data_service import TokenDataService
from iam.domain import errors
from iam.domain.result import Result, Return

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for soft-deleting a user.

    Business Rules:
    - status becomes deleted; the row, profile and memberships are kept
    - Every cached session snapshot of the user is dropped (best-effort)
    - Issued tokens stop validating because the user is no longer found
    """

    def __init__(self, uow: UnitOfWork, token_data: TokenDataService):
        self.uow = uow
        self.token_data = token_data

    async def execute(self, user_id: UUID) -> Result[None]:
        async with self.uow:
            deleted = await self.uow.users.soft_delete(user_id)
            if not deleted:
                return Return.err(errors.USER_NOT_FOUND)
            await self.uow.commit()

        try:
            removed = await self.token_data.invalidate_user_tokens(str(user_id))
            logger.info("Deleted user %s, dropped %d cached sessions", user_id, removed)
        except Exception:
            logger.warning("Failed to invalidate sessions of deleted user %s", user_id, exc_info=True)

        return Return.ok()
