"""
Confirm Password Reset Use Case

Consumes a reset envelope and sets the new password.
"""

import logging
from typing import Optional

import bcrypt

from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.collection_store import StorageError
from todo_service.app.services.password_reset import MAX_PASSWORD_BYTES, password_too_long
from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Input is validated before any token work
    - The envelope signature, type and expiry must verify
    - The ledger record must exist, be unused and be unexpired
    - Every token failure yields the same INVALID_TOKEN error
    - The token is claimed (marked used) before the password changes and
      released again if the change cannot be completed
    - Password is hashed with bcrypt (cost factor 12) before the claim
    """

    def __init__(self, uow: UnitOfWork, codec: ResetTokenCodec):
        self.uow = uow
        self.codec = codec

    def _validate_input(self, token: Optional[str], password: Optional[str]) -> Result[None]:
        if not token:
            return Return.err(Error("VALIDATION_ERROR", "Reset token is required"))

        if not password or len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        if password_too_long(password):
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
                )
            )

        return Return.ok(None)

    async def execute(
        self, token: Optional[str], new_password: Optional[str]
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Signed reset envelope from the reset link
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - VALIDATION_ERROR: token missing, password too short or too long
            - INVALID_TOKEN: envelope or ledger record invalid, expired or used
            - USER_NOT_FOUND: account vanished after the token was issued
            - PASSWORD_UPDATE_FAILED: the new password could not be stored
        """
        validation = self._validate_input(token, new_password)
        if validation.is_err():
            return Return.err(validation.error)

        claims = self.codec.unwrap(token)
        if claims is None:
            return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

        email, reset_token = claims
        password_hash = bcrypt.hashpw(new_password.encode("utf-8"), bcrypt.gensalt(12))

        async with self.uow:
            ledger = self.uow.password_reset_tokens

            if not await ledger.validate(email, reset_token):
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            # Claim before changing the password; a concurrent request that
            # validated the same token loses here.
            if not await ledger.mark_used(email, reset_token):
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            try:
                outcome = await self._update_password(email, password_hash.decode("utf-8"))
            except Exception:
                logger.exception("Password reset failed after the token was claimed")
                await ledger.release(email, reset_token)
                raise

            if outcome.is_err():
                await ledger.release(email, reset_token)
                return outcome

        logger.info(f"Password reset completed for user {outcome.value}")

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )

    async def _update_password(self, email: str, password_hash: str) -> Result[str]:
        """Store the new hash; returns the user id"""
        user = await self.uow.users.get_by_email(email)
        if user is None:
            logger.error("Reset token validated for an email with no account")
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        try:
            updated = await self.uow.users.update(user.email, {"password_hash": password_hash})
        except StorageError as e:
            logger.error(f"Failed to store new password for user {user.id}: {e}")
            return Return.err(Error("PASSWORD_UPDATE_FAILED", "Failed to update password"))

        if not updated:
            logger.error(f"User {user.id} disappeared during password reset")
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        return Return.ok(user.id)

