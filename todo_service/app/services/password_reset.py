import secrets
from datetime import timedelta
from urllib.parse import urlencode

# Applies to both the ledger record and the signed reset envelope
RESET_TOKEN_TTL = timedelta(hours=1)

RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """256-bit random secret rendered as 64 lowercase hex characters"""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def build_reset_url(envelope: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/reset-password?{urlencode({'token': envelope})}"


# bcrypt only accepts passwords up to this many bytes
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES
