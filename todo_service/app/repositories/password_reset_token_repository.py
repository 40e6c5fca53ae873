from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from todo_service.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken ledger interface - application layer"""

    @abstractmethod
    async def store(self, email: str, token: str, ttl: timedelta) -> PasswordResetToken:
        """Replace any record for this email with a fresh, unused one"""
        pass

    @abstractmethod
    async def validate(self, email: str, token: str) -> bool:
        """
        Check that (email, token) is unused and unexpired.

        Drops every expired or used record from the ledger as a side effect.
        """
        pass

    @abstractmethod
    async def mark_used(self, email: str, token: str) -> bool:
        """
        Mark the (email, token) record as used.

        Returns True only if the record existed and was not already used.
        No matching record is a no-op.
        """
        pass

    @abstractmethod
    async def release(self, email: str, token: str) -> bool:
        """Undo mark_used for a reset that could not be completed"""
        pass

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired records regardless of use; returns how many"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[PasswordResetToken]:
        """Get the ledger record for an email, whatever its state"""
        pass
