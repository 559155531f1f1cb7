from datetime import timedelta
from typing import Optional

import redis.asyncio as aioredis
from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from iam.adapter.services.redis_event_publisher import RedisEventPublisher
from iam.adapter.services.redis_session_cache import RedisSessionCache
from iam.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from iam.api.cookies import ACCESS_TOKEN_COOKIE, CookieSettings
from iam.api.error import ClientError
from iam.app.services.event_dispatcher import EventDispatcher
from iam.app.services.event_publisher import IEventBus
from iam.app.services.session_cache import ISessionCache
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth import AuthenticatedUser, TokenDataService, ValidateTokenUseCase
from iam.app.utils.jwt import TokenCodec
from iam.domain import errors

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

redis_client = aioredis.from_url(
    ApplicationConfig.REDIS_URL,
    decode_responses=True,
    socket_timeout=ApplicationConfig.REDIS_TIMEOUT_SECONDS,
    socket_connect_timeout=ApplicationConfig.REDIS_TIMEOUT_SECONDS,
)

session_cache = RedisSessionCache(redis_client)

event_dispatcher = EventDispatcher(
    RedisEventPublisher(redis_client),
    workers=ApplicationConfig.EVENT_WORKERS,
    max_queue_size=ApplicationConfig.EVENT_QUEUE_SIZE,
)

token_codec = TokenCodec(
    secret=ApplicationConfig.JWT_SECRET,
    ttl=timedelta(seconds=ApplicationConfig.JWT_EXPIRATION_SECONDS),
    issuer=ApplicationConfig.JWT_ISSUER,
)

cookie_settings = CookieSettings.from_config(ApplicationConfig)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec() -> TokenCodec:
    return token_codec


def get_session_cache() -> ISessionCache:
    return session_cache


def get_event_bus() -> IEventBus:
    return event_dispatcher


def get_cookie_settings() -> CookieSettings:
    return cookie_settings


def get_encryption_key() -> str:
    return ApplicationConfig.ENCRYPTION_KEY


def get_token_data_service(
    cache: ISessionCache = Depends(get_session_cache),
) -> TokenDataService:
    return TokenDataService(
        cache, ttl=timedelta(seconds=ApplicationConfig.JWT_EXPIRATION_SECONDS)
    )


def extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """access_token cookie first, Authorization: Bearer as fallback"""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
) -> Optional[AuthenticatedUser]:
    """Validated caller, or None when no usable token is presented"""
    token = extract_token(request, credentials)
    if not token:
        return None

    result = await ValidateTokenUseCase(uow, codec).execute(token)
    if result.is_err():
        return None
    return result.value


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthenticatedUser:
    """
    Dependency guarding authenticated routes.

    Raises:
        ClientError: 401 TOKEN_REQUIRED without a token, 401 TOKEN_INVALID for
            any validation failure (unknown, deleted or inactive users included)
    """
    token = extract_token(request, credentials)
    if not token:
        raise ClientError(errors.TOKEN_REQUIRED, status_code=status.HTTP_401_UNAUTHORIZED)

    result = await ValidateTokenUseCase(uow, codec).execute(token)
    if result.is_err():
        raise ClientError(errors.TOKEN_INVALID, status_code=status.HTTP_401_UNAUTHORIZED)
    return result.value


async def require_super_admin(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    if not current_user.is_super_admin:
        raise ClientError(
            errors.WORKSPACE_CREATE_FORBIDDEN, status_code=status.HTTP_403_FORBIDDEN
        )
    return current_user
