import logging
from datetime import UTC, datetime, timedelta
from typing import Callable, List, Optional

from todo_service.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from todo_service.app.services.collection_store import CollectionStore
from todo_service.domain.entities import PasswordResetToken

logger = logging.getLogger(__name__)

RESET_TOKENS_COLLECTION = "resetTokens"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """
    Reset-token ledger over a CollectionStore.

    Every operation is a full load / mutate / persist cycle performed while
    holding the collection lock, so concurrent requests never lose each
    other's updates.
    """

    def __init__(
        self,
        store: CollectionStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.collections = store
        self.clock = clock or _utc_now

    async def _load(self) -> List[PasswordResetToken]:
        records = await self.collections.read(RESET_TOKENS_COLLECTION)
        return [PasswordResetToken.from_record(record) for record in records]

    async def _save(self, tokens: List[PasswordResetToken]) -> None:
        await self.collections.write(
            RESET_TOKENS_COLLECTION, [token.to_record() for token in tokens]
        )

    async def store(self, email: str, token: str, ttl: timedelta) -> PasswordResetToken:
        """Replace any record for this email with a fresh, unused one"""
        reset_token = PasswordResetToken(
            email=email,
            token=token,
            expires_at=self.clock() + ttl,
            used=False,
        )
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            tokens = await self._load()
            tokens = [t for t in tokens if t.email != email]
            tokens.append(reset_token)
            await self._save(tokens)
        return reset_token

    async def validate(self, email: str, token: str) -> bool:
        """Check that (email, token) is unused and unexpired, pruning stale records"""
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            now = self.clock()
            tokens = await self._load()
            live = [t for t in tokens if t.is_valid(now)]

            if len(live) != len(tokens):
                await self._save(live)

        return any(t.matches(email, token) for t in live)

    async def mark_used(self, email: str, token: str) -> bool:
        """Mark (email, token) as used; True only on the unused -> used transition"""
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            tokens = await self._load()
            for reset_token in tokens:
                if reset_token.matches(email, token):
                    was_unused = not reset_token.used
                    reset_token.used = True
                    await self._save(tokens)
                    return was_unused
        return False

    async def release(self, email: str, token: str) -> bool:
        """Undo mark_used for a reset that could not be completed"""
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            tokens = await self._load()
            for reset_token in tokens:
                if reset_token.matches(email, token) and reset_token.used:
                    reset_token.used = False
                    await self._save(tokens)
                    return True
        return False

    async def cleanup_expired(self) -> int:
        """Remove expired records regardless of use; returns how many"""
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            now = self.clock()
            tokens = await self._load()
            remaining = [t for t in tokens if not t.is_expired(now)]
            removed = len(tokens) - len(remaining)

            if removed:
                await self._save(remaining)
                logger.info(f"Cleaned up {removed} expired reset tokens")

        return removed

    async def get_by_email(self, email: str) -> Optional[PasswordResetToken]:
        """Get the ledger record for an email, whatever its state"""
        async with self.collections.lock(RESET_TOKENS_COLLECTION):
            tokens = await self._load()
        for reset_token in tokens:
            if reset_token.email == email:
                return reset_token
        return None
