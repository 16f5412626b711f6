"""Background event loop for synchronous callers."""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Coroutine, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionWorker:
    """Runs an asyncio loop in a daemon thread.

    A calendar session lives on this loop, so realtime reloads keep running
    between requests. Synchronous code (Flask views) submits coroutines with
    ``run`` and blocks until they finish.
    """

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, name="planisphere-session", daemon=True
        )
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._loop.is_closed()

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """Run ``coro`` on the worker loop and return its result.

        Raises:
            TimeoutError: If the coroutine does not finish in time; it is
                cancelled on the loop.
        """
        timeout = timeout or self.timeout
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            future.cancel()
            logger.warning(f"Session call timed out after {timeout}s")
            raise TimeoutError(f"Timed out after {timeout}s waiting for the store")

    def shutdown(self) -> None:
        """Stop the loop and join the thread."""
        if not self.running:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=self.timeout)
        if self._thread.is_alive():
            logger.warning("Session worker did not stop in time")
            return
        self._loop.close()
        logger.debug("Session worker stopped")
