"""
Unit tests for ConfirmPasswordResetUseCase
"""
from datetime import timedelta

import bcrypt
import pytest

from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.collection_store import StorageError
from todo_service.app.use_cases.auth.confirm_password_reset_use_case import (
    ConfirmPasswordResetUseCase,
)
from todo_service.domain.entities import User

RESET_TOKEN = "ab" * 32


@pytest.fixture
def codec():
    return ResetTokenCodec("test-secret")


@pytest.fixture
def user():
    return User(id="user-1", name="Alice", email="alice@example.com", password_hash="old")


@pytest.fixture
def envelope(codec):
    return codec.wrap("alice@example.com", RESET_TOKEN)


@pytest.mark.asyncio
async def test_successful_reset_claims_token_and_updates_password(
    mock_uow, codec, user, envelope
):
    mock_uow.users.get_by_email.return_value = user

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.is_ok()
    assert result.value.status == "success"
    assert result.value.message == "Password has been reset successfully"

    mock_uow.password_reset_tokens.validate.assert_called_once_with(
        "alice@example.com", RESET_TOKEN
    )
    mock_uow.password_reset_tokens.mark_used.assert_called_once_with(
        "alice@example.com", RESET_TOKEN
    )
    mock_uow.password_reset_tokens.release.assert_not_called()

    email, fields = mock_uow.users.update.call_args.args
    assert email == "alice@example.com"
    new_hash = fields["password_hash"]
    assert new_hash.startswith("$2b$12$")
    assert bcrypt.checkpw(b"newpass", new_hash.encode("utf-8"))


@pytest.mark.asyncio
async def test_missing_token_is_validation_error(mock_uow, codec):
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute("", "newpass")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "Reset token is required"
    mock_uow.password_reset_tokens.validate.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("password", [None, "", "12345"])
async def test_short_password_is_validation_error(mock_uow, codec, envelope, password):
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, password)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "Password must be at least 6 characters long"
    mock_uow.password_reset_tokens.validate.assert_not_called()


@pytest.mark.asyncio
async def test_six_character_password_is_accepted(mock_uow, codec, user, envelope):
    mock_uow.users.get_by_email.return_value = user

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "123456")

    assert result.is_ok()


@pytest.mark.asyncio
async def test_validation_runs_before_token_checks(mock_uow, codec):
    """A garbage token with a short password reports the password problem"""
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute("garbage", "123")

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_malformed_envelope_is_invalid_token(mock_uow, codec):
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute("not-a-jwt", "newpass")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert result.error.message == "Invalid or expired reset token"
    mock_uow.password_reset_tokens.validate.assert_not_called()


@pytest.mark.asyncio
async def test_envelope_signed_with_other_secret_is_invalid_token(mock_uow, codec):
    forged = ResetTokenCodec("other-secret").wrap("alice@example.com", RESET_TOKEN)

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(forged, "newpass")

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_envelope_is_invalid_token(mock_uow, codec):
    expired = ResetTokenCodec("test-secret", expires_delta=timedelta(seconds=-10)).wrap(
        "alice@example.com", RESET_TOKEN
    )

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(expired, "newpass")

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.password_reset_tokens.validate.assert_not_called()


@pytest.mark.asyncio
async def test_ledger_rejection_is_invalid_token(mock_uow, codec, envelope):
    """Superseded, used or expired ledger records all look the same"""
    mock_uow.password_reset_tokens.validate.return_value = False

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.error.code == "INVALID_TOKEN"
    assert result.error.message == "Invalid or expired reset token"
    mock_uow.password_reset_tokens.mark_used.assert_not_called()
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_losing_the_claim_race_is_invalid_token(mock_uow, codec, user, envelope):
    """Another request consumed the token between validate and mark_used"""
    mock_uow.users.get_by_email.return_value = user
    mock_uow.password_reset_tokens.mark_used.return_value = False

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_missing_user_releases_token(mock_uow, codec, envelope):
    mock_uow.users.get_by_email.return_value = None

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.password_reset_tokens.release.assert_called_once_with(
        "alice@example.com", RESET_TOKEN
    )


@pytest.mark.asyncio
async def test_user_removed_during_update_releases_token(mock_uow, codec, user, envelope):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.update.return_value = False

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.password_reset_tokens.release.assert_called_once()


@pytest.mark.asyncio
async def test_storage_failure_releases_token(mock_uow, codec, user, envelope):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.update.side_effect = StorageError("disk full")

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "newpass")

    assert result.is_err()
    assert result.error.code == "PASSWORD_UPDATE_FAILED"
    mock_uow.password_reset_tokens.release.assert_called_once_with(
        "alice@example.com", RESET_TOKEN
    )


@pytest.mark.asyncio
async def test_password_over_bcrypt_limit_is_validation_error(mock_uow, codec, envelope):
    """An over-long password is rejected before the token is touched"""
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "x" * 80)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "Password must be at most 72 bytes long"
    mock_uow.password_reset_tokens.validate.assert_not_called()
    mock_uow.password_reset_tokens.mark_used.assert_not_called()


@pytest.mark.asyncio
async def test_password_limit_counts_bytes_not_characters(mock_uow, codec, envelope):
    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    result = await use_case.execute(envelope, "é" * 40)

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unexpected_failure_after_claim_releases_token(mock_uow, codec, user, envelope):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.update.side_effect = RuntimeError("unexpected")

    use_case = ConfirmPasswordResetUseCase(mock_uow, codec)
    with pytest.raises(RuntimeError):
        await use_case.execute(envelope, "newpass")

    mock_uow.password_reset_tokens.release.assert_called_once_with(
        "alice@example.com", RESET_TOKEN
    )
