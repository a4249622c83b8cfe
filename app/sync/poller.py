"""Fixed-interval refresh loop and the AI chat session built on it."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from app.core.config import settings
from app.schemas.ai import AIChatResponse
from app.sync.client import MessengerClient, SyncError
from app.sync.state import AIChatView

logger = logging.getLogger(__name__)


class Poller:
    """
    Runs a refresh coroutine every ``interval`` seconds until stopped.

    A failed refresh is logged and skipped; whatever state the refresh
    maintains keeps its previous snapshot until a later cycle succeeds.
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[None]],
        interval: Optional[float] = None,
        name: str = "poller",
    ):
        self.refresh = refresh
        self.interval = interval if interval is not None else settings.poll_interval_seconds
        if self.interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.name = name
        self.failures = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> bool:
        """Run one refresh cycle. Returns whether it succeeded."""
        try:
            await self.refresh()
        except SyncError as e:
            self.failures += 1
            logger.warning("%s refresh failed (%s): %s", self.name, e.error_code, e.message)
            return False
        return True

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            started = loop.time()
            await self.poll_once()
            # Cycles start every ``interval`` seconds; a slow refresh shortens the wait
            await asyncio.sleep(max(0.0, self.interval - (loop.time() - started)))

    def start(self) -> asyncio.Task:
        """Start polling in the background; the first refresh runs immediately."""
        if self.running:
            return self._task
        self._task = asyncio.create_task(self._run(), name=self.name)
        return self._task

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None


class AIChatSession:
    """Ties the AI chat view to the server.

    Sending shows the prompt right away, then the reply, and finally
    re-reads the stored history so the view matches what was persisted.
    """

    def __init__(
        self,
        client: MessengerClient,
        view: Optional[AIChatView] = None,
        history_limit: Optional[int] = None,
    ):
        self.client = client
        self.view = view or AIChatView()
        self.history_limit = history_limit

    async def refresh(self) -> None:
        as_of = self.view.mark()
        turns = await self.client.fetch_ai_history(self.history_limit)
        self.view.reconcile(turns, as_of=as_of)

    async def send(self, prompt: str, reconcile: bool = True) -> AIChatResponse:
        """Send a prompt with an optimistic local append.

        If the request fails the optimistic prompt stays visible until the
        next refresh replaces it, and the error is re-raised.
        """
        exchange = self.view.submit(prompt)
        try:
            reply = await self.client.send_ai_message(prompt)
        except SyncError:
            self.view.fail(exchange)
            raise
        self.view.acknowledge(exchange, reply.message)

        if reconcile:
            try:
                await self.refresh()
            except SyncError as e:
                logger.warning("AI history reconcile failed: %s", e.message)
        return reply

    def poller(self, interval: Optional[float] = None) -> Poller:
        """Build a poller that keeps this session's view in sync."""
        return Poller(self.refresh, interval=interval, name="ai-history")
