"""
Login Use Case

Verifies local credentials, issues the signed token and its encrypted twin,
and caches the user's permission snapshot.
"""

import logging
from functools import lru_cache
from typing import Optional, Union

from iam.app.services.event_publisher import USER_LOGIN, IEventBus
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.utils.encryption import EnvelopeError, encrypt_token
from iam.app.utils.jwt import TokenCodec
from iam.app.utils.password import hash_password, verify_password
from iam.domain import errors
from iam.domain.base import utcnow
from iam.domain.entities import AuthProviderKind, MembershipStatus, UserStatus
from iam.domain.result import Result, Return

from .dtos import LoginCommand, LoginResponse, to_user_info
from .token_data_service import TokenDataService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return hash_password("dummy_password")


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email, missing local provider and wrong password all return the
      same INVALID_CREDENTIALS error
    - A bcrypt comparison runs even when the email is unknown
    - User must have status=active (USER_INACTIVE otherwise)
    - last_login_at update is best-effort
    - Snapshot caching is best-effort; the signed token alone keeps the
      session usable
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        token_data: TokenDataService,
        encryption_key: Union[str, bytes],
        events: Optional[IEventBus] = None,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.token_data = token_data
        self.encryption_key = encryption_key
        self.events = events

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email and plain text password

        Returns:
            Result with LoginResponse containing both tokens and the user with
            active workspace memberships, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            if user is None:
                # Keep timing comparable to the wrong-password path
                verify_password(command.password, _dummy_password_hash())
                return Return.err(errors.INVALID_CREDENTIALS)

            if user.status != UserStatus.active:
                return Return.err(errors.USER_INACTIVE)

            user_id = user.id
            auth_provider = await self.uow.users.get_auth_provider(
                user_id, AuthProviderKind.local
            )
            if auth_provider is None or auth_provider.password_hash is None:
                return Return.err(errors.INVALID_CREDENTIALS)

            if not verify_password(command.password, auth_provider.password_hash):
                return Return.err(errors.INVALID_CREDENTIALS)

            await self._touch_last_login(user_id)

            access_token = self.token_codec.issue(str(user_id))
            try:
                encrypted_token = encrypt_token(access_token, self.encryption_key)
            except EnvelopeError:
                logger.exception("Failed to encrypt token for user %s", user_id)
                return Return.err(errors.AUTHENTICATION_FAILED)

            user_with_workspaces = await self.uow.users.get_with_workspaces(user_id)
            if user_with_workspaces is None:
                return Return.err(errors.USER_NOT_FOUND)

            token_data = TokenDataService.build_token_data(user_with_workspaces)
            active_memberships = [
                m
                for m in user_with_workspaces.workspace_memberships
                if m.status == MembershipStatus.active
            ]
            user_info = to_user_info(
                user_with_workspaces,
                profile=user_with_workspaces.profile,
                memberships=active_memberships,
            )

        try:
            await self.token_data.store_token_data(
                str(user_id), encrypted_token, token_data, ttl=self.token_codec.ttl
            )
        except Exception:
            logger.warning("Failed to cache token data for user %s", user_id, exc_info=True)

        if self.events is not None:
            self.events.dispatch(USER_LOGIN, {"userId": str(user_id)})

        return Return.ok(
            LoginResponse(
                access_token=access_token,
                encrypted_token=encrypted_token,
                user=user_info,
            )
        )

    async def _touch_last_login(self, user_id) -> None:
        try:
            await self.uow.users.update_last_login(user_id, utcnow())
            await self.uow.commit()
        except Exception:
            logger.warning("Failed to update last login time for user %s", user_id, exc_info=True)
            await self.uow.rollback()
