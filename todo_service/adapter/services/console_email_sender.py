import logging
import uuid

from todo_service.app.services.email_sender import EmailReceipt, IEmailSender

logger = logging.getLogger(__name__)


class ConsoleEmailSender(IEmailSender):
    """Development sender: logs the reset link instead of mailing it"""

    async def send_password_reset(
        self, to_email: str, reset_token: str, reset_url: str
    ) -> EmailReceipt:
        message_id = f"console-{uuid.uuid4()}"
        logger.info(f"Password reset email for {to_email} ({message_id}): {reset_url}")
        return EmailReceipt(success=True, message_id=message_id)
