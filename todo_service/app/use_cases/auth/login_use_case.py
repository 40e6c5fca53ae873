from typing import Optional

import bcrypt

from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginUseCase:
    """
    Login Use Case

    Verifies credentials only; issuing sessions is left to the client.
    Unknown email and wrong password produce the same error.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: Optional[str], password: Optional[str]
    ) -> Result[LoginResponse]:
        if not email or not password:
            return Return.err(
                Error("VALIDATION_ERROR", "Email and password are required")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

        if user is None:
            return Return.err(Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE))

        try:
            password_matches = bcrypt.checkpw(
                password.encode("utf-8"), user.password_hash.encode("utf-8")
            )
        except ValueError:
            # Stored hash is not a bcrypt hash
            password_matches = False

        if not password_matches:
            return Return.err(Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE))

        return Return.ok(
            LoginResponse(
                message="Login successful",
                user=UserInfo(id=user.id, name=user.name, email=user.email),
            )
        )
