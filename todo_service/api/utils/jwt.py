from datetime import UTC, datetime, timedelta
from typing import NamedTuple, Optional

from jose import JWTError, jwt

from todo_service.app.services.password_reset import RESET_TOKEN_TTL

ALGORITHM = "HS256"
PASSWORD_RESET_TYPE = "password-reset"


class ResetClaims(NamedTuple):
    email: str
    reset_token: str


class ResetTokenCodec:
    """
    Signs and verifies password reset envelopes.

    The envelope is an HS256 JWT carrying the owning email, the ledger
    secret and a ``type`` claim. Its expiry is enforced here, independently
    of the ledger record's own expiry.
    """

    def __init__(self, secret: str, expires_delta: timedelta = RESET_TOKEN_TTL):
        self.secret = secret
        self.expires_delta = expires_delta

    def wrap(self, email: str, reset_token: str) -> str:
        """
        Create a password reset envelope

        Args:
            email: Owning account email
            reset_token: Ledger secret

        Returns:
            JWT string (HS256)
        """
        now = datetime.now(UTC)
        payload = {
            "email": email,
            "resetToken": reset_token,
            "type": PASSWORD_RESET_TYPE,
            "exp": now + self.expires_delta,
            "iat": now,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def unwrap(self, token: str) -> Optional[ResetClaims]:
        """
        Verify a password reset envelope

        Returns:
            ResetClaims, or None on a bad signature, expiry, wrong type or
            malformed input
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError:
            return None

        if payload.get("type") != PASSWORD_RESET_TYPE:
            return None

        email = payload.get("email")
        reset_token = payload.get("resetToken")
        if not isinstance(email, str) or not isinstance(reset_token, str):
            return None

        return ResetClaims(email=email, reset_token=reset_token)
