from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EmailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail transport"""


class EmailReceipt(BaseModel):
    success: bool
    message_id: Optional[str] = None


class IEmailSender(ABC):
    """Email delivery capability - application layer"""

    @abstractmethod
    async def send_password_reset(
        self, to_email: str, reset_token: str, reset_url: str
    ) -> EmailReceipt:
        """
        Send a password reset message.

        Raises:
            EmailDeliveryError: the message could not be sent
        """
        pass
