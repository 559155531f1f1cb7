from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.app.utils.jwt import TokenCodec


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with user and workspace repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.exists_by_email = AsyncMock(return_value=False)
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_with_profile = AsyncMock()
    uow.users.get_with_workspaces = AsyncMock()
    uow.users.create_with_auth = AsyncMock(side_effect=lambda user, profile, provider: user)
    uow.users.update_last_login = AsyncMock()
    uow.users.soft_delete = AsyncMock(return_value=True)
    uow.users.get_auth_provider = AsyncMock()
    uow.users.update_auth_provider = AsyncMock(side_effect=lambda provider: provider)

    uow.workspaces = MagicMock()
    uow.workspaces.exists_by_slug = AsyncMock(return_value=False)
    uow.workspaces.create = AsyncMock(side_effect=lambda workspace: workspace)
    uow.workspaces.create_role = AsyncMock(side_effect=lambda role: role)
    uow.workspaces.create_membership = AsyncMock(side_effect=lambda membership: membership)

    return uow


@pytest.fixture
def token_codec():
    return TokenCodec(secret="unit-test-secret", ttl=timedelta(hours=72))


@pytest.fixture
def mock_token_data():
    """TokenDataService double; build_token_data stays the real staticmethod"""
    from iam.app.use_cases.auth import TokenDataService

    token_data = MagicMock(spec=TokenDataService)
    token_data.store_token_data = AsyncMock()
    token_data.get_token_data = AsyncMock()
    token_data.delete_token_data = AsyncMock()
    token_data.invalidate_user_tokens = AsyncMock(return_value=0)
    return token_data


@pytest.fixture
def mock_events():
    events = MagicMock()
    events.dispatch = MagicMock()
    return events
