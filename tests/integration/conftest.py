import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from iam.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from iam.api.cookies import CookieSettings
from iam.depends import get_cookie_settings, get_event_bus, get_session_cache, get_unit_of_work
from tests.integration.fakes import InMemorySessionCache, RecordingEventBus


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'iam_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def session_cache():
    return InMemorySessionCache()


@pytest_asyncio.fixture
def event_bus():
    return RecordingEventBus()


@pytest_asyncio.fixture
async def client(db_session, session_cache, event_bus):
    from httpx import ASGITransport
    from iam.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session_cache] = lambda: session_cache
    app.dependency_overrides[get_event_bus] = lambda: event_bus
    app.dependency_overrides[get_cookie_settings] = lambda: CookieSettings(secure=False)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
