"""
User Entity

Credential record for a registered account.
"""

from sqlmodel import Field

from todo_service.domain.base import BaseModel, generate_uuid


class User(BaseModel):
    """
    User entity - the credential record.

    Business Rules:
    - id is assigned at registration and never changes
    - Email is unique, compared case-insensitively, stored as provided
    - Password stored as bcrypt hash; only password changes mutate it
    - Records are never deleted
    """

    id: str = Field(default_factory=generate_uuid)
    name: str
    email: str
    password_hash: str
