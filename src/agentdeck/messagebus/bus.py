"""In-process publish/subscribe bus keyed by message type."""

import asyncio
import logging
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator

from agentdeck.messagebus.messages import BusMessage, MessageType

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None] | None]


class MessageBus:
    """
    Fan-out bus. Every handler subscribed to a message's type receives it,
    in subscription order. The bus does no request/response matching.
    """

    def __init__(self) -> None:
        self._handlers: dict[MessageType, list[Handler]] = defaultdict(list)

    def subscribe(self, kind: MessageType, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one message type.

        Returns:
            Function that removes this subscription (safe to call twice)
        """
        self._handlers[kind].append(handler)
        logger.debug(f"Subscribed handler to {kind.value}")

        def unsubscribe() -> None:
            handlers = self._handlers.get(kind, [])
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Unsubscribed handler from {kind.value}")

        return unsubscribe

    @contextmanager
    def subscription(self, kind: MessageType, handler: Handler) -> Iterator[None]:
        """Keep a handler subscribed for the duration of a block."""
        unsubscribe = self.subscribe(kind, handler)
        try:
            yield
        finally:
            unsubscribe()

    def subscriber_count(self, kind: MessageType) -> int:
        return len(self._handlers.get(kind, []))

    async def publish(self, message: BusMessage) -> None:
        """Deliver a message to every current subscriber of its type."""
        # Snapshot so handlers may unsubscribe while being called
        handlers = list(self._handlers.get(message.type, []))
        logger.debug(f"Publishing {message.type.value} to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                result = handler(message)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(f"Error in {message.type.value} handler: {e}")
