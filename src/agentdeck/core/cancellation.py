"""Cooperative cancellation token passed through every run boundary."""

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    A one-shot cancellation signal.

    cancel() is idempotent. Holders either poll `cancelled`, await `wait()`,
    or register a callback that fires once on cancellation.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._callbacks: list[Callable[[], None]] = []
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        """Signal cancellation. Calling again is a no-op."""
        if self._event.is_set():
            return

        self.reason = reason
        self._event.set()

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in cancellation callback: {e}")

    async def wait(self) -> None:
        """Block until cancelled."""
        await self._event.wait()

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Run callback on cancellation (immediately if already cancelled).

        Returns:
            Function that removes the callback
        """
        if self.cancelled:
            callback()
            return lambda: None

        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove
