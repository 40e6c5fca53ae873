import pytest
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.store = AsyncMock()
    uow.password_reset_tokens.validate = AsyncMock(return_value=True)
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)
    uow.password_reset_tokens.release = AsyncMock(return_value=True)
    uow.password_reset_tokens.cleanup_expired = AsyncMock(return_value=0)

    uow.todos = MagicMock()
    uow.todos.list_by_user_id = AsyncMock(return_value=[])
    uow.todos.get_by_id = AsyncMock(return_value=None)
    uow.todos.create = AsyncMock(side_effect=lambda todo: todo)
    uow.todos.update = AsyncMock(return_value=None)
    uow.todos.delete = AsyncMock(return_value=False)
    return uow


class FakeClock:
    """Settable clock for ledger tests"""

    def __init__(self, now: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta):
        self.now = self.now + delta


@pytest.fixture
def clock():
    return FakeClock()
