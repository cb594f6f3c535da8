"""Server-Sent Events rendering of the country cache observables."""

import asyncio
import logging
from typing import AsyncIterator

from pydantic_core import to_json

from services.country_store import CountryStore

logger = logging.getLogger(__name__)

STREAMS = ("countries", "loading", "error")


def format_event(event: str, value) -> str:
    return f"event: {event}\ndata: {to_json(value).decode()}\n\n"


async def stream_events(store: CountryStore) -> AsyncIterator[str]:
    """Yield one SSE message per cache change.

    The current value of each stream is replayed first, in the order
    countries, loading, error. Listeners are removed when the consumer stops
    iterating.
    """
    queue: asyncio.Queue[tuple[str, object]] = asyncio.Queue()
    unsubscribers = []
    for name in STREAMS:
        observable = getattr(store, name)
        unsubscribers.append(
            observable.subscribe(lambda value, name=name: queue.put_nowait((name, value)))
        )
    logger.debug("Event stream subscribed")

    try:
        while True:
            name, value = await queue.get()
            yield format_event(name, value)
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
        logger.debug("Event stream unsubscribed")
