import logging

from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth.token_data_service import TokenDataService
from iam.app.utils.password import hash_password, validate_password_strength, verify_password
from iam.domain import errors
from iam.domain.entities import AuthProviderKind
from iam.domain.result import Result, Return

from .dtos import ChangePasswordCommand

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the local password.

    Business Rules:
    - Current password must match the local provider (INVALID_CREDENTIALS)
    - New password must satisfy the strength policy
    - After commit every cached session snapshot of the user is dropped
      (best-effort)
    """

    def __init__(self, uow: UnitOfWork, token_data: TokenDataService):
        self.uow = uow
        self.token_data = token_data

    async def execute(self, command: ChangePasswordCommand) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_id(command.user_id)
            if user is None:
                return Return.err(errors.USER_NOT_FOUND)

            auth_provider = await self.uow.users.get_auth_provider(
                user.id, AuthProviderKind.local
            )
            if auth_provider is None or auth_provider.password_hash is None:
                return Return.err(errors.INVALID_CREDENTIALS)

            if not verify_password(command.current_password, auth_provider.password_hash):
                return Return.err(errors.INVALID_CREDENTIALS)

            weak_password = validate_password_strength(command.new_password)
            if weak_password is not None:
                return Return.err(weak_password)

            auth_provider.password_hash = hash_password(command.new_password)
            await self.uow.users.update_auth_provider(auth_provider)
            await self.uow.commit()

        try:
            await self.token_data.invalidate_user_tokens(str(command.user_id))
        except Exception:
            logger.warning(
                "Failed to invalidate sessions after password change for user %s",
                command.user_id,
                exc_info=True,
            )

        return Return.ok()
