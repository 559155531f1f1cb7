"""
Event Dispatcher

Fire-and-forget delivery of domain events. Use cases call dispatch(), which
only enqueues; a fixed pool of worker tasks drains the queue and publishes.
Publish failures are logged and never reach the request that raised the event.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from iam.app.services.event_publisher import IEventBus, IEventPublisher

logger = logging.getLogger(__name__)


class EventDispatcher(IEventBus):
    """Bounded queue + worker pool in front of an IEventPublisher"""

    def __init__(self, publisher: IEventPublisher, workers: int = 2, max_queue_size: int = 1000):
        self.publisher = publisher
        self.workers = max(1, workers)
        self._queue: asyncio.Queue[Tuple[str, Dict[str, Any]]] = asyncio.Queue(
            maxsize=max_queue_size
        )
        self._tasks: List[asyncio.Task] = []
        self._running = False

    async def start(self) -> None:
        """Start the worker tasks."""
        if self._running:
            logger.warning("Event dispatcher already running")
            return

        self._running = True
        self._tasks = [
            asyncio.create_task(self._run_worker(i)) for i in range(self.workers)
        ]
        logger.info("Event dispatcher started with %d workers", self.workers)

    async def stop(self, drain_timeout: Optional[float] = 5.0) -> None:
        """Drain pending events (bounded by drain_timeout) and stop the workers."""
        if not self._running:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Event dispatcher stopped with %d undelivered events", self._queue.qsize()
            )

        self._running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Event dispatcher stopped")

    def dispatch(self, topic: str, payload: Dict[str, Any]) -> None:
        """Enqueue an event without waiting. Drops (and logs) when the queue is full."""
        if not self._running:
            logger.warning("Event dispatcher not running, dropping %s event", topic)
            return

        try:
            self._queue.put_nowait((topic, payload))
        except asyncio.QueueFull:
            logger.warning("Event queue full, dropping %s event", topic)

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    async def _run_worker(self, index: int) -> None:
        while True:
            topic, payload = await self._queue.get()
            try:
                await self.publisher.publish(topic, payload)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Worker %d failed to publish %s event", index, topic)
            finally:
                self._queue.task_done()
