"""
Revoke Sessions Use Case

Drops every cached session snapshot of a user ("log out everywhere").
"""

import logging
from uuid import UUID

from iam.app.services.session_cache import SessionCacheError
from iam.app.use_cases.auth.token_data_service import TokenDataService
from iam.domain import errors
from iam.domain.result import Result, Return

from .dtos import RevokeSessionsResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking all sessions of a user.

    Business Rules:
    - Users revoke their own sessions only
    - Unlike logout this is not best-effort: a cache failure is reported
    - Signed tokens already issued stay valid until they expire
    """

    def __init__(self, token_data: TokenDataService):
        self.token_data = token_data

    async def execute(self, user_id: UUID) -> Result[RevokeSessionsResponse]:
        try:
            count = await self.token_data.invalidate_user_tokens(str(user_id))
        except SessionCacheError:
            logger.exception("Failed to revoke sessions for user %s", user_id)
            return Return.err(errors.SESSION_REVOCATION_FAILED)

        logger.info("Revoked %d sessions for user %s", count, user_id)
        return Return.ok(RevokeSessionsResponse(user_id=str(user_id), revoked_count=count))
