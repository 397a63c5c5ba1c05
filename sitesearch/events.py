"""
Event fan-out between the search engine and its consumers.

The controller sees one async listener; EventBroadcaster is that listener and
copies each event onto every subscriber's queue.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator

from .schemas import SearchEvent


class EventBroadcaster:
    def __init__(self) -> None:
        self._queues: set[asyncio.Queue[SearchEvent]] = set()

    async def __call__(self, event: SearchEvent) -> None:
        for queue in list(self._queues):
            queue.put_nowait(event)

    def subscribe(self) -> asyncio.Queue[SearchEvent]:
        queue: asyncio.Queue[SearchEvent] = asyncio.Queue()
        self._queues.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[SearchEvent]) -> None:
        self._queues.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    async def session_events(
        self, queue: asyncio.Queue[SearchEvent], session_id: int
    ) -> AsyncIterator[SearchEvent]:
        """
        Yield the events of one session from *queue*, up to and including its
        complete event.  Events of other sessions are dropped.
        """
        while True:
            event = await queue.get()
            if event.session_id != session_id:
                continue
            yield event
            if event.event == "complete":
                return
