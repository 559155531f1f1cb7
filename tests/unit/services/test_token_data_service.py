import json
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from iam.app.services.session_cache import SessionCacheMissError
from iam.app.use_cases.auth import (
    DEFAULT_TOKEN_DATA_TTL,
    TokenDataService,
    UserTokenData,
    WorkspaceMembershipTokenData,
)
from iam.domain.entities import (
    GlobalRole,
    MembershipStatus,
    User,
    UserStatus,
    WorkspaceMembership,
    WorkspaceRole,
)


@pytest.fixture
def cache():
    cache = AsyncMock()
    cache.invalidate_all.return_value = 3
    return cache


def _snapshot():
    return UserTokenData(
        global_role="customer",
        workspace_memberships=[
            WorkspaceMembershipTokenData(
                workspace_id="w-1", role_name="admin", permissions=["all"], status="active"
            )
        ],
    )


@pytest.mark.asyncio
async def test_store_serializes_snapshot_with_ttl(cache):
    service = TokenDataService(cache)

    await service.store_token_data("u-1", "enc", _snapshot(), ttl=timedelta(hours=1))

    user_id, key, payload, ttl = cache.store.await_args.args
    assert (user_id, key, ttl) == ("u-1", "enc", 3600)
    assert json.loads(payload)["workspace_memberships"][0]["role_name"] == "admin"


@pytest.mark.asyncio
async def test_store_falls_back_to_72h(cache):
    service = TokenDataService(cache, ttl=timedelta(0))

    await service.store_token_data("u-1", "enc", _snapshot())

    assert service.ttl == DEFAULT_TOKEN_DATA_TTL
    assert cache.store.await_args.args[3] == 72 * 3600


@pytest.mark.asyncio
async def test_get_deserializes(cache):
    cache.fetch.return_value = _snapshot().model_dump_json()
    service = TokenDataService(cache)

    data = await service.get_token_data("u-1", "enc")

    assert data == _snapshot()
    cache.fetch.assert_awaited_once_with("u-1", "enc")


@pytest.mark.asyncio
async def test_get_propagates_miss(cache):
    cache.fetch.side_effect = SessionCacheMissError("auth:token:u-1:enc")
    service = TokenDataService(cache)

    with pytest.raises(SessionCacheMissError):
        await service.get_token_data("u-1", "enc")


@pytest.mark.asyncio
async def test_delete_and_invalidate_pass_through(cache):
    service = TokenDataService(cache)

    await service.delete_token_data("u-1", "enc")
    removed = await service.invalidate_user_tokens("u-1")

    cache.delete.assert_awaited_once_with("u-1", "enc")
    cache.invalidate_all.assert_awaited_once_with("u-1")
    assert removed == 3


def test_build_token_data_keeps_only_active_memberships():
    user = User(id=uuid4(), email="a@b.com", global_role=GlobalRole.super_admin, status=UserStatus.active)
    active_role = WorkspaceRole(id=uuid4(), workspace_id=uuid4(), name="admin", permissions={"permissions": ["all"]})
    pending_role = WorkspaceRole(id=uuid4(), workspace_id=uuid4(), name="viewer", permissions={"permissions": ["read"]})

    active = WorkspaceMembership(
        user_id=user.id, workspace_id=active_role.workspace_id, role_id=active_role.id, status=MembershipStatus.active
    )
    active.role = active_role
    pending = WorkspaceMembership(
        user_id=user.id, workspace_id=pending_role.workspace_id, role_id=pending_role.id, status=MembershipStatus.pending
    )
    pending.role = pending_role
    user.workspace_memberships = [active, pending]

    data = TokenDataService.build_token_data(user)

    assert data.global_role == "super_admin"
    assert len(data.workspace_memberships) == 1
    snapshot = data.workspace_memberships[0]
    assert snapshot.workspace_id == str(active_role.workspace_id)
    assert snapshot.role_name == "admin"
    assert snapshot.permissions == ["all"]
    assert snapshot.status == "active"
