import logging

from iam.domain.result import Result, Return

from .token_data_service import TokenDataService

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out a single session.

    Business Rules:
    - Deletes the cached snapshot of this session only
    - Always succeeds; cache failures are logged
    - The signed token stays valid until expiry, clearing cookies is the
      caller's job
    """

    def __init__(self, token_data: TokenDataService):
        self.token_data = token_data

    async def execute(self, user_id: str, encrypted_token: str) -> Result[None]:
        if not encrypted_token:
            logger.debug("Logout for user %s without encrypted token", user_id)
            return Return.ok()

        try:
            await self.token_data.delete_token_data(user_id, encrypted_token)
        except Exception:
            logger.warning("Failed to delete token data for user %s", user_id, exc_info=True)

        return Return.ok()
