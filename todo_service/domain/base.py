import uuid
from datetime import UTC, datetime

from sqlmodel import SQLModel


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseModel(SQLModel):
    """Base for records persisted as JSON collections"""

    def to_record(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict):
        return cls.model_validate(record)
