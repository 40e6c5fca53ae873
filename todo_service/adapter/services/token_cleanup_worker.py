"""Reset-token cleanup background worker.

Runs on an asyncio task owned by the FastAPI lifespan. Purges expired
ledger records once at start and then every ``interval_seconds``.
"""

import asyncio
import contextlib
import logging
from datetime import UTC, datetime
from typing import Callable, Optional

from todo_service.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

PRODUCTION_INTERVAL_SECONDS = 60 * 60
DEVELOPMENT_INTERVAL_SECONDS = 5 * 60


class TokenCleanupWorker:
    """Background worker that periodically purges expired reset tokens.

    Lifecycle:
    - start() creates an asyncio task that runs the cleanup loop.
    - stop() cancels the task and waits for it to finish.
    - run_once() executes a single cleanup pass.

    Args:
        uow_factory: Builds a UnitOfWork over the shared store.
        interval_seconds: Seconds between cleanup passes.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        interval_seconds: int = PRODUCTION_INTERVAL_SECONDS,
    ) -> None:
        self._uow_factory = uow_factory
        self._interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._last_run_at: Optional[datetime] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running and self._task is not None and not self._task.done()

    @property
    def last_run_at(self) -> Optional[datetime]:
        return self._last_run_at

    def start(self) -> None:
        """Start the cleanup loop. No-op if already running.

        Must be called with a running event loop.
        """
        if self.is_running:
            logger.warning("Token cleanup worker already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Token cleanup worker started (interval={self._interval_seconds}s)")

    async def stop(self) -> None:
        self._running = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        logger.info("Token cleanup worker stopped")

    async def run_once(self) -> int:
        """Execute a single cleanup pass; returns the number of records removed."""
        async with self._uow_factory() as uow:
            removed = await uow.password_reset_tokens.cleanup_expired()
        self._last_run_at = datetime.now(UTC)
        return removed

    async def _run_loop(self) -> None:
        """Background loop: run_once -> sleep -> repeat."""
        try:
            while self._running:
                try:
                    await self.run_once()
                except Exception:
                    logger.exception("Error in reset token cleanup pass")
                await asyncio.sleep(self._interval_seconds)
        except asyncio.CancelledError:
            logger.debug("Token cleanup loop cancelled")
            raise
