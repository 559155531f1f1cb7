import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from iam.app.services.event_publisher import USER_CREATED, IEventBus
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.utils.password import hash_password, validate_password_strength
from iam.domain import errors
from iam.domain.entities import (
    AuthProviderKind,
    GlobalRole,
    User,
    UserAuthProvider,
    UserProfile,
    UserStatus,
)
from iam.domain.result import Result, Return

from .dtos import SignupCommand, SignupResponse, to_user_info

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Validate password strength (fails fast, before any DB access)
    2. Check if email already exists
    3. Hash password with bcrypt cost factor 10
    4. Create User (active, customer), UserProfile and local UserAuthProvider
    5. Commit the three rows atomically (a unique violation from a concurrent
       signup is reported as EMAIL_ALREADY_EXISTS)
    6. Emit user.created (fire-and-forget)

    No token is issued; the caller logs in separately.
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventBus] = None):
        self.uow = uow
        self.events = events

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with email, password, first and last name

        Returns:
            Result[SignupResponse] with the created user,
            a PASSWORD_* error if the password is weak,
            or Error(EMAIL_ALREADY_EXISTS) if email exists
        """
        weak_password = validate_password_strength(command.password)
        if weak_password is not None:
            return Return.err(weak_password)

        async with self.uow:
            if await self.uow.users.exists_by_email(command.email):
                return Return.err(errors.EMAIL_ALREADY_EXISTS)

            password_hash = hash_password(command.password)

            user = User(
                email=command.email,
                global_role=GlobalRole.customer,
                status=UserStatus.active,
            )
            profile = UserProfile(
                first_name=command.first_name,
                last_name=command.last_name,
                timezone="UTC",
                locale="en",
            )
            auth_provider = UserAuthProvider(
                provider=AuthProviderKind.local,
                provider_user_id=command.email,
                provider_email=command.email,
                provider_data={},
                password_hash=password_hash,
                is_primary=True,
            )

            # Any failure here leaves the context uncommitted and rolls back all three rows
            try:
                user = await self.uow.users.create_with_auth(user, profile, auth_provider)
                await self.uow.commit()
            except IntegrityError:
                # concurrent signup won the users.email unique constraint
                logger.warning("Signup lost email uniqueness race for %s", command.email)
                await self.uow.rollback()
                return Return.err(errors.EMAIL_ALREADY_EXISTS)

        if self.events is not None:
            self.events.dispatch(USER_CREATED, {"userId": str(user.id), "email": user.email})

        return Return.ok(
            SignupResponse(
                message="Signup successful",
                user=to_user_info(user, profile=profile),
            )
        )
