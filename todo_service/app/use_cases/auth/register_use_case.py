import logging

import bcrypt

from todo_service.app.services.password_reset import MAX_PASSWORD_BYTES, password_too_long
from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.domain.entities import User
from todo_service.libs.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Name, email and password are all required; password at most 72 bytes
    2. Email must not already be registered (case-insensitive); the
       repository re-checks under its lock when creating
    3. Hash password with bcrypt cost factor 12
    4. Create User with a fresh UUID
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        if not command.name or not command.email or not command.password:
            return Return.err(
                Error("VALIDATION_ERROR", "Name, email, and password are required")
            )

        if password_too_long(command.password):
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
                )
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User with this email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                name=command.name,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
            )
            created = await self.uow.users.create(user)
            if created is None:
                # Registered concurrently since the check above
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User with this email already exists")
                )
            user = created

        logger.info(f"Registered user {user.id}")

        return Return.ok(
            RegisterResponse(
                message="User created successfully",
                user=UserInfo(id=user.id, name=user.name, email=user.email),
            )
        )
