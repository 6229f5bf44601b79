"""
Push channel for server-sent analysis events.

One producer writes events; one consumer (the HTTP response) iterates
the rendered frames. Once the channel is completed, by a terminal event,
a close or a consumer cancellation, every further emit is dropped.
"""

import asyncio
import logging
from typing import AsyncIterator, List, Optional

from analyzer.shared.contracts.stream_events import (
    TERMINAL_EVENT_TYPES,
    StreamEvent,
    format_sse,
)


logger = logging.getLogger(__name__)

_CLOSE = object()


class StreamChannel:
    """
    Single-producer event channel with idempotent close.

    Emission and close only touch a boolean and an unbounded queue, so no
    lock is needed with a single producer.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._completed = False
        self._closed = False
        self._producer: Optional[asyncio.Task] = None
        self.sent: List[StreamEvent] = []

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, event: StreamEvent) -> bool:
        """
        Queue an event for the consumer.

        Returns:
            False if the channel was already completed and the event was
            dropped, True otherwise.
        """
        if self._completed:
            logger.debug(f"[Stream] Dropping {event.type} event after completion")
            return False

        self._queue.put_nowait(format_sse(event))
        self.sent.append(event)
        if event.type in TERMINAL_EVENT_TYPES:
            self._completed = True
        return True

    def close(self) -> None:
        """End the stream. Closing a closed channel is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._completed = True
        self._queue.put_nowait(_CLOSE)

    def attach_producer(self, task: asyncio.Task) -> None:
        """Register the task feeding this channel so cancel() can stop it."""
        self._producer = task

    def cancel(self) -> None:
        """Consumer went away: stop emitting, stop the producer and close."""
        if not self._completed:
            logger.info("[Stream] Consumer cancelled the stream")
        self._completed = True
        if self._producer is not None and not self._producer.done():
            self._producer.cancel()
        self.close()

    async def __aiter__(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is _CLOSE:
                return
            yield frame
