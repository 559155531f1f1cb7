"""
Token Data Service

JSON (de)serialization of session snapshots on top of the session cache.
"""

from datetime import timedelta
from typing import Optional

from iam.app.services.session_cache import ISessionCache
from iam.domain.entities import MembershipStatus, User

from .dtos import UserTokenData, WorkspaceMembershipTokenData

DEFAULT_TOKEN_DATA_TTL = timedelta(hours=72)


class TokenDataService:
    """Store/get/delete/invalidate cached snapshots keyed by (user, encrypted token)"""

    def __init__(self, cache: ISessionCache, ttl: Optional[timedelta] = None):
        self.cache = cache
        self.ttl = ttl if ttl and ttl.total_seconds() > 0 else DEFAULT_TOKEN_DATA_TTL

    async def store_token_data(
        self,
        user_id: str,
        encrypted_token: str,
        token_data: UserTokenData,
        ttl: Optional[timedelta] = None,
    ) -> None:
        effective_ttl = ttl if ttl and ttl.total_seconds() > 0 else self.ttl
        await self.cache.store(
            str(user_id),
            encrypted_token,
            token_data.model_dump_json(),
            int(effective_ttl.total_seconds()),
        )

    async def get_token_data(self, user_id: str, encrypted_token: str) -> UserTokenData:
        """Raises SessionCacheMissError when no snapshot exists"""
        payload = await self.cache.fetch(str(user_id), encrypted_token)
        return UserTokenData.model_validate_json(payload)

    async def delete_token_data(self, user_id: str, encrypted_token: str) -> None:
        await self.cache.delete(str(user_id), encrypted_token)

    async def invalidate_user_tokens(self, user_id: str) -> int:
        return await self.cache.invalidate_all(str(user_id))

    @staticmethod
    def build_token_data(user: User) -> UserTokenData:
        """Snapshot of global role and active memberships that have a role loaded"""
        memberships = [
            WorkspaceMembershipTokenData(
                workspace_id=str(m.workspace_id),
                role_name=m.role.name,
                permissions=list(m.role.permission_set().permissions),
                status=m.status.value,
            )
            for m in user.workspace_memberships
            if m.status == MembershipStatus.active and m.role is not None
        ]
        return UserTokenData(
            global_role=user.global_role.value,
            workspace_memberships=memberships,
        )
