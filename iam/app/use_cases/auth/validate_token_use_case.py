import logging
from uuid import UUID

from iam.app.services.unit_of_work import UnitOfWork
from iam.app.utils.jwt import TokenCodec, TokenError
from iam.domain import errors
from iam.domain.entities import UserStatus
from iam.domain.result import Result, Return

from .dtos import AuthenticatedUser

logger = logging.getLogger(__name__)


class ValidateTokenUseCase:
    """
    Gate for every authenticated request.

    Business Rules:
    - Token must verify (signature, algorithm, issuer, expiry); any codec
      failure becomes TOKEN_INVALID
    - Subject user must still exist (USER_NOT_FOUND otherwise, soft-deleted
      users included)
    - Subject user must be active (USER_INACTIVE otherwise)
    - The session cache is never consulted
    - Store errors propagate
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, token: str) -> Result[AuthenticatedUser]:
        if not token:
            return Return.err(errors.TOKEN_REQUIRED)

        try:
            user_id = self.token_codec.verify(token)
        except TokenError as exc:
            logger.debug("Token rejected: %s", exc.error.code)
            return Return.err(errors.TOKEN_INVALID)

        try:
            user_uuid = UUID(user_id)
        except ValueError:
            return Return.err(errors.TOKEN_INVALID)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_uuid)
            if user is None:
                return Return.err(errors.USER_NOT_FOUND)

            if user.status != UserStatus.active:
                return Return.err(errors.USER_INACTIVE)

            return Return.ok(
                AuthenticatedUser(
                    id=user.id,
                    email=user.email,
                    global_role=user.global_role,
                    status=user.status,
                )
            )
