import logging

from libs.result import Error, Result, Return

from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import DuplicateKeyError, PersistenceError, UnitOfWork
from .signup_dto import SignupCommand, SignupResponse, UserInfo
from src.domain.entities import User

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Check if email already exists
    2. Hash password with a fresh bcrypt salt
    3. Create User with normalized date of birth
    4. Commit transaction
    5. Return identity, name, last name and email (never the hash)
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated profile fields and password

        Returns:
            Result[SignupResponse] with the created user's public data,
            Error(DUPLICATE_EMAIL) if the email exists,
            or Error(PERSISTENCE_ERROR) on store failure
        """
        async with self.uow:
            try:
                existing_user = await self.uow.users.get_by_email(command.email)
                if existing_user:
                    return Return.err(
                        Error(
                            "DUPLICATE_EMAIL",
                            "Email duplicated, please enter another email.",
                        )
                    )

                user = User(
                    email=command.email,
                    password_hash=self.hasher.hash(command.password),
                    name=command.name,
                    last_name=command.last_name,
                    telephone=command.telephone,
                    date_of_birth=command.date_of_birth,
                    latitude=command.latitude,
                    longitude=command.longitude,
                )
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except DuplicateKeyError:
                # Lost a race with a concurrent signup for the same email
                return Return.err(
                    Error(
                        "DUPLICATE_EMAIL",
                        "Email duplicated, please enter another email.",
                    )
                )
            except PersistenceError:
                logger.exception("Signup failed to persist user")
                return Return.err(Error("PERSISTENCE_ERROR", "Unable to create user"))

            logger.info(f"User signed up: {user.id}")

            return Return.ok(
                SignupResponse(
                    code="01",
                    user_info=UserInfo(
                        id=str(user.id),
                        name=user.name,
                        last_name=user.last_name,
                        email=user.email,
                    ),
                )
            )
