from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from iam.api.cookies import ENCRYPTED_TOKEN_COOKIE, CookieSettings, clear_auth_cookies, set_auth_cookies
from iam.api.error import to_http_error
from iam.app.services.event_publisher import IEventBus
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth import (
    AuthenticatedUser,
    LoginCommand,
    LoginUseCase,
    LogoutUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
    TokenDataService,
    UserInfo,
)
from iam.app.utils.jwt import TokenCodec
from iam.depends import (
    get_cookie_settings,
    get_encryption_key,
    get_event_bus,
    get_optional_user,
    get_token_codec,
    get_token_data_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Password strength is checked by the use case so that each rule reports its
    own error code.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    events: IEventBus = Depends(get_event_bus),
):
    """
    User Signup

    Creates an active customer with profile and local credentials. No token
    is issued.

    Raises:
        - 400 Bad Request: Weak password (PASSWORD_*)
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = SignupCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    result = await SignupUseCase(uow, events).execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class LoginHttpResponse(BaseModel):
    """Tokens travel in cookies; the body carries the user"""

    message: str
    user: UserInfo


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginHttpResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
    token_data: TokenDataService = Depends(get_token_data_service),
    encryption_key: str = Depends(get_encryption_key),
    events: IEventBus = Depends(get_event_bus),
    cookie_settings: CookieSettings = Depends(get_cookie_settings),
):
    """
    User Login

    Sets the access_token and encrypted_token cookies.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: User inactive
    """
    use_case = LoginUseCase(uow, codec, token_data, encryption_key, events)
    result = await use_case.execute(
        LoginCommand(email=request.email, password=request.password)
    )

    if result.is_err():
        raise to_http_error(result.error)

    login_response = result.value
    set_auth_cookies(
        response,
        login_response.access_token,
        login_response.encrypted_token,
        max_age=int(codec.ttl.total_seconds()),
        settings=cookie_settings,
    )
    return LoginHttpResponse(message="Login successful", user=login_response.user)


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    request: Request,
    response: Response,
    current_user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    token_data: TokenDataService = Depends(get_token_data_service),
    cookie_settings: CookieSettings = Depends(get_cookie_settings),
):
    """
    Logout

    Drops the cached snapshot of this session and clears both cookies. Always
    succeeds, even without a valid token.
    """
    encrypted_token = request.cookies.get(ENCRYPTED_TOKEN_COOKIE, "")
    if current_user is not None:
        await LogoutUseCase(token_data).execute(str(current_user.id), encrypted_token)

    clear_auth_cookies(response, cookie_settings)
    return {"message": "Logout successful"}
