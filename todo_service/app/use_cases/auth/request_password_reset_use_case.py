"""
Request Password Reset Use Case

Issues a reset token for an existing account and emails a signed reset link.
"""

import logging
from datetime import timedelta
from typing import Optional

from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.email_sender import EmailDeliveryError, IEmailSender
from todo_service.app.services.password_reset import (
    RESET_TOKEN_TTL,
    build_reset_url,
    generate_reset_token,
)
from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Email must contain "@"
    - No email enumeration (same response for known/unknown emails)
    - Unknown email: no token issued, no email sent
    - Known email: 256-bit secret stored in the ledger for 1 hour, replacing
      any earlier one, then wrapped in a signed envelope and emailed
    - Delivery failure is reported; the stored token is left to expire
    """

    def __init__(
        self,
        uow: UnitOfWork,
        codec: ResetTokenCodec,
        email_sender: IEmailSender,
        base_url: str,
        ttl: timedelta = RESET_TOKEN_TTL,
    ):
        self.uow = uow
        self.codec = codec
        self.email_sender = email_sender
        self.base_url = base_url
        self.ttl = ttl

    async def execute(self, email: Optional[str]) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address submitted by the client

        Returns:
            Result with the generic confirmation, or Error

        Errors:
            - VALIDATION_ERROR: email missing or malformed
            - EMAIL_DELIVERY_FAILED: the reset email could not be sent
        """
        if not email or "@" not in email:
            return Return.err(
                Error("VALIDATION_ERROR", "Please provide a valid email address")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                logger.info("Password reset requested for unknown email")
                return Return.ok(
                    RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)
                )

            # The ledger and envelope are keyed by the stored email so that
            # differently-cased requests supersede each other.
            reset_token = generate_reset_token()
            await self.uow.password_reset_tokens.store(user.email, reset_token, self.ttl)

            envelope = self.codec.wrap(user.email, reset_token)
            reset_url = build_reset_url(envelope, self.base_url)

        try:
            receipt = await self.email_sender.send_password_reset(
                user.email, reset_token, reset_url
            )
        except EmailDeliveryError as e:
            logger.error(f"Password reset email delivery failed for user {user.id}: {e}")
            return Return.err(
                Error(
                    "EMAIL_DELIVERY_FAILED",
                    "Failed to send password reset email. Please try again later.",
                )
            )

        logger.info(f"Password reset email sent for user {user.id} ({receipt.message_id})")

        return Return.ok(
            RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)
        )
