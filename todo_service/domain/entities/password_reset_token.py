"""
PasswordResetToken Entity

Ledger record for an outstanding (or consumed) password reset.
"""

from datetime import datetime

from sqlmodel import Field

from todo_service.domain.base import BaseModel


class PasswordResetToken(BaseModel):
    """
    PasswordResetToken entity - one ledger record per email.

    Business Rules:
    - Issuing a new token for an email supersedes any earlier one
    - Expires 1 hour after issuance
    - Valid only while unused and unexpired
    - Single-use: marked as used after a successful reset
    """

    email: str
    token: str
    expires_at: datetime
    used: bool = Field(default=False)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_valid(self, now: datetime) -> bool:
        return not self.used and now < self.expires_at

    def matches(self, email: str, token: str) -> bool:
        return self.email == email and self.token == token
