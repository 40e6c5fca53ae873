import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from todo_service.app.services.email_sender import EmailDeliveryError, EmailReceipt, IEmailSender

logger = logging.getLogger(__name__)

APP_NAME = "TodoApp"


class SmtpEmailSender(IEmailSender):
    """Sends password reset emails through an SMTP relay"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        use_tls: bool = True,
        timeout: int = 20,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.use_tls = use_tls
        self.timeout = timeout

    async def send_password_reset(
        self, to_email: str, reset_token: str, reset_url: str
    ) -> EmailReceipt:
        try:
            msg = self._build_reset_message(to_email, reset_url)
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(f"Error sending password reset email: {e}")
            raise EmailDeliveryError("Failed to send password reset email") from e

        return EmailReceipt(success=True, message_id=msg["Message-ID"])

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)

    def _build_reset_message(self, to_email: str, reset_url: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_email
        msg["To"] = to_email
        msg["Subject"] = f"Password Reset Request - {APP_NAME}"
        msg["Message-ID"] = make_msgid(domain=self.from_email.split("@")[-1])
        msg.set_content(
            f"You recently requested to reset your password for your {APP_NAME} account.\n\n"
            f"Reset it here: {reset_url}\n\n"
            "This password reset link will expire in 1 hour for security reasons.\n"
            "If you didn't request a password reset, please ignore this email."
        )
        msg.add_alternative(self._build_reset_email_html(reset_url), subtype="html")
        return msg

    def _build_reset_email_html(self, reset_url: str) -> str:
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h1>{APP_NAME}</h1>
            <h2>Password Reset Request</h2>
            <p>You recently requested to reset your password for your {APP_NAME} account.
               Click the button below to reset it.</p>
            <p style="margin: 30px 0;">
                <a href="{reset_url}"
                   style="background-color: #667eea; color: white; padding: 15px 30px;
                          text-decoration: none; border-radius: 25px;">
                    Reset Password
                </a>
            </p>
            <p>If you didn't request a password reset, please ignore this email or
               contact support if you have concerns.</p>
            <p style="color: #999; font-size: 14px;">
                This password reset link will expire in 1 hour for security reasons.
                If the button doesn't work, copy and paste this link into your browser:
                {reset_url}
            </p>
        </div>
        """
