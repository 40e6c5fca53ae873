import logging
from datetime import timedelta

import bcrypt
from fastapi import Depends, Request

from todo_service.adapter.services.console_email_sender import ConsoleEmailSender
from todo_service.adapter.services.in_memory_collection_store import InMemoryCollectionStore
from todo_service.adapter.services.json_file_collection_store import JsonFileCollectionStore
from todo_service.adapter.services.smtp_email_sender import SmtpEmailSender
from todo_service.adapter.services.unit_of_work import CollectionUnitOfWork
from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.collection_store import CollectionStore
from todo_service.app.services.email_sender import IEmailSender
from todo_service.domain.entities import User

logger = logging.getLogger(__name__)

DEMO_USER_NAME = "Test User"
DEMO_USER_EMAIL = "test@example.com"
DEMO_USER_PASSWORD = "password123"


def create_collection_store(config) -> CollectionStore:
    """Select the storage backend once, from configuration"""
    if config.STORAGE_BACKEND == "memory":
        seed = {}
        if config.SEED_DEMO_USER:
            password_hash = bcrypt.hashpw(DEMO_USER_PASSWORD.encode("utf-8"), bcrypt.gensalt(12))
            demo_user = User(
                id="1",
                name=DEMO_USER_NAME,
                email=DEMO_USER_EMAIL,
                password_hash=password_hash.decode("utf-8"),
            )
            seed["users"] = [demo_user.to_record()]
        logger.info("Using in-memory storage")
        return InMemoryCollectionStore(seed=seed)

    if config.STORAGE_BACKEND == "file":
        logger.info(f"Using JSON file storage in {config.DATA_DIR}")
        return JsonFileCollectionStore(config.DATA_DIR)

    raise ValueError(f"Unknown STORAGE_BACKEND: {config.STORAGE_BACKEND}")


def create_email_sender(config) -> IEmailSender:
    if config.EMAIL_BACKEND == "smtp":
        return SmtpEmailSender(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            from_email=config.SMTP_FROM_EMAIL,
            use_tls=config.SMTP_USE_TLS,
        )

    if config.EMAIL_BACKEND == "console":
        return ConsoleEmailSender()

    raise ValueError(f"Unknown EMAIL_BACKEND: {config.EMAIL_BACKEND}")


def create_reset_token_codec(config) -> ResetTokenCodec:
    return ResetTokenCodec(
        config.JWT_SECRET,
        expires_delta=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
    )


def get_config(request: Request):
    return request.app.state.config


def get_collection_store(request: Request) -> CollectionStore:
    return request.app.state.collection_store


async def get_unit_of_work(store: CollectionStore = Depends(get_collection_store)):
    yield CollectionUnitOfWork(store)


def get_reset_token_codec(request: Request) -> ResetTokenCodec:
    return request.app.state.reset_token_codec


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender
