"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.email_sender import EmailDeliveryError, EmailReceipt
from todo_service.app.use_cases.auth.request_password_reset_use_case import (
    RESET_REQUESTED_MESSAGE,
    RequestPasswordResetUseCase,
)
from todo_service.domain.entities import User

BASE_URL = "http://localhost:3000"


@pytest.fixture
def codec():
    return ResetTokenCodec("test-secret")


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_password_reset = AsyncMock(
        return_value=EmailReceipt(success=True, message_id="msg-1")
    )
    return sender


@pytest.fixture
def user():
    return User(id="user-1", name="Alice", email="alice@example.com", password_hash="hash")


def _envelope_from(reset_url: str) -> str:
    return parse_qs(urlparse(reset_url).query)["token"][0]


@pytest.mark.asyncio
async def test_known_email_stores_token_and_sends_link(mock_uow, codec, email_sender, user):
    """Known email: a fresh 64-hex-char token is stored for one hour and emailed"""
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    result = await use_case.execute("alice@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    assert result.value.message == RESET_REQUESTED_MESSAGE

    mock_uow.password_reset_tokens.store.assert_called_once()
    email, reset_token, ttl = mock_uow.password_reset_tokens.store.call_args.args
    assert email == "alice@example.com"
    assert len(reset_token) == 64
    int(reset_token, 16)  # hex
    assert ttl == timedelta(hours=1)

    email_sender.send_password_reset.assert_called_once()
    to_email, sent_token, reset_url = email_sender.send_password_reset.call_args.args
    assert to_email == "alice@example.com"
    assert sent_token == reset_token
    assert reset_url.startswith(f"{BASE_URL}/reset-password?token=")

    claims = codec.unwrap(_envelope_from(reset_url))
    assert claims is not None
    assert claims.email == "alice@example.com"
    assert claims.reset_token == reset_token


@pytest.mark.asyncio
async def test_unknown_email_returns_same_response_without_side_effects(
    mock_uow, codec, email_sender
):
    """No enumeration: unknown email gets the generic response, no token, no email"""
    mock_uow.users.get_by_email.return_value = None

    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    result = await use_case.execute("nobody@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    assert result.value.message == RESET_REQUESTED_MESSAGE
    mock_uow.password_reset_tokens.store.assert_not_called()
    email_sender.send_password_reset.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("email", [None, "", "not-an-email"])
async def test_invalid_email_is_rejected(mock_uow, codec, email_sender, email):
    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    result = await use_case.execute(email)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.users.get_by_email.assert_not_called()
    email_sender.send_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_ledger_is_keyed_by_stored_email(mock_uow, codec, email_sender, user):
    """A differently-cased request is recorded under the account's own email"""
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    result = await use_case.execute("ALICE@Example.com")

    assert result.is_ok()
    email = mock_uow.password_reset_tokens.store.call_args.args[0]
    assert email == "alice@example.com"
    _, _, reset_url = email_sender.send_password_reset.call_args.args
    assert codec.unwrap(_envelope_from(reset_url)).email == "alice@example.com"


@pytest.mark.asyncio
async def test_delivery_failure_is_reported(mock_uow, codec, email_sender, user):
    """Delivery failure surfaces EMAIL_DELIVERY_FAILED; the token stays stored"""
    mock_uow.users.get_by_email.return_value = user
    email_sender.send_password_reset.side_effect = EmailDeliveryError("smtp down")

    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    result = await use_case.execute("alice@example.com")

    assert result.is_err()
    assert result.error.code == "EMAIL_DELIVERY_FAILED"
    assert result.error.message == (
        "Failed to send password reset email. Please try again later."
    )
    mock_uow.password_reset_tokens.store.assert_called_once()


@pytest.mark.asyncio
async def test_custom_ttl_is_used_for_ledger(mock_uow, codec, email_sender, user):
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(
        mock_uow, codec, email_sender, BASE_URL, ttl=timedelta(minutes=15)
    )
    await use_case.execute("alice@example.com")

    assert mock_uow.password_reset_tokens.store.call_args.args[2] == timedelta(minutes=15)


@pytest.mark.asyncio
async def test_each_request_generates_a_new_token(mock_uow, codec, email_sender, user):
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(mock_uow, codec, email_sender, BASE_URL)
    await use_case.execute("alice@example.com")
    await use_case.execute("alice@example.com")

    first, second = mock_uow.password_reset_tokens.store.call_args_list
    assert first.args[1] != second.args[1]
