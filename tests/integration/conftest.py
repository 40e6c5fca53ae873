import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import ApplicationConfig
from todo_service.adapter.services.in_memory_collection_store import InMemoryCollectionStore
from todo_service.adapter.services.unit_of_work import CollectionUnitOfWork
from todo_service.app.services.email_sender import EmailDeliveryError, EmailReceipt, IEmailSender
from todo_service.domain.entities import User


class TestConfig(ApplicationConfig):
    __test__ = False

    STORAGE_BACKEND = "memory"
    EMAIL_BACKEND = "console"
    JWT_SECRET = "integration-test-secret"
    APP_BASE_URL = "http://localhost:3000"
    RESET_TOKEN_TTL_MINUTES = 60


class RecordingEmailSender(IEmailSender):
    """Captures reset emails instead of delivering them"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_password_reset(self, to_email, reset_token, reset_url):
        if self.fail:
            raise EmailDeliveryError("SMTP relay unavailable")
        self.sent.append({"to": to_email, "token": reset_token, "url": reset_url})
        return EmailReceipt(success=True, message_id=f"test-{len(self.sent)}")


@pytest.fixture
def store():
    return InMemoryCollectionStore()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def app(store, email_sender):
    from todo_service.api.app import create_app

    return create_app(TestConfig, collection_store=store, email_sender=email_sender)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def create_user(store):
    async def _create_user(email="test@example.com", password="password123", name="Test User"):
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(4))
        user = User(name=name, email=email, password_hash=password_hash.decode("utf-8"))
        async with CollectionUnitOfWork(store) as uow:
            await uow.users.create(user)
        return user

    return _create_user
