"""
In-memory multi-topic event bus.

Topics keep a thread-safe set of live subscriptions. Publishing is a
fire-and-forget broadcast: every subscription owns an unbounded asyncio
queue, so a slow or absent consumer never blocks a publisher. Delivery is
at-most-once and best-effort; nothing is persisted or replayed.
"""

import asyncio
import logging
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from core.domain.events import DomainEvent
from core.metrics import (
    active_subscriptions,
    events_delivered_total,
    events_dropped_total,
    events_published_total,
)

logger = logging.getLogger(__name__)

EventPredicate = Callable[[DomainEvent], bool]

# Queue sentinel that wakes a consumer blocked on a cancelled subscription
_CLOSED = object()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Subscription:
    """
    A live, cancellable stream of events from one topic.

    Consume it with ``async for``, ``await subscription.next()`` or, from
    synchronous code, ``get_nowait()``. The subscription binds to the event
    loop it was created in, or else to the first loop that awaits it;
    publishers running in other threads hand events over through
    ``call_soon_threadsafe`` so per-subscriber order is kept.
    """

    def __init__(
        self,
        topic: "Topic",
        predicate: Optional[EventPredicate] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize subscription.

        Args:
            topic: Topic the subscription belongs to
            predicate: Optional filter; events it rejects are not delivered
            loop: Loop consuming the queue (defaults to the running loop)
        """
        self.id = uuid.uuid4()
        self._topic = topic
        self._predicate = predicate
        self._queue: asyncio.Queue = asyncio.Queue()
        self._loop = loop or _running_loop()
        self._lock = threading.Lock()
        # Guards binding to the consuming loop against direct puts
        self._bind_lock = threading.Lock()
        self._cancelled = False

    @property
    def topic_name(self) -> str:
        """Name of the topic this subscription listens to."""
        return self._topic.name

    @property
    def cancelled(self) -> bool:
        """Whether the subscription has been cancelled."""
        return self._cancelled

    def pending(self) -> int:
        """Number of delivered events not yet consumed."""
        return self._queue.qsize()

    def accepts(self, event: DomainEvent) -> bool:
        """Check the per-subscription filter."""
        return self._predicate is None or bool(self._predicate(event))

    def deliver(self, event: DomainEvent) -> bool:
        """
        Hand an event to this subscriber without blocking.

        Args:
            event: Event to deliver

        Returns:
            True if the event was queued for this subscriber
        """
        if self._cancelled or not self.accepts(event):
            return False
        if not self._enqueue(event):
            logger.warning(
                "Subscriber loop closed, cancelling subscription %s on %s",
                self.id,
                self.topic_name,
            )
            self.cancel()
            return False
        return True

    def _enqueue(self, item: Any) -> bool:
        with self._bind_lock:
            loop = self._loop
            if loop is None:
                self._queue.put_nowait(item)
                return True
        if loop is _running_loop():
            self._queue.put_nowait(item)
            return True
        try:
            loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            return False
        return True

    def cancel(self) -> None:
        """Stop delivery to this subscriber. Safe to call repeatedly."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
        self._topic._remove(self)
        self._enqueue(_CLOSED)
        logger.debug("Cancelled subscription %s on %s", self.id, self.topic_name)

    def get_nowait(self) -> Optional[DomainEvent]:
        """
        Return the next delivered event, or None if nothing is pending.
        """
        while True:
            try:
                item = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return None
            if item is not _CLOSED:
                return item

    async def next(self, timeout: Optional[float] = None) -> DomainEvent:
        """
        Wait for the next event.

        Args:
            timeout: Seconds to wait (None waits forever)

        Raises:
            StopAsyncIteration: If the subscription is cancelled
            asyncio.TimeoutError: If no event arrives in time
        """
        return await asyncio.wait_for(self.__anext__(), timeout)

    def __aiter__(self):
        return self

    def _bind_loop(self) -> None:
        if self._loop is None:
            with self._bind_lock:
                if self._loop is None:
                    self._loop = asyncio.get_running_loop()

    async def __anext__(self) -> DomainEvent:
        if self._cancelled:
            raise StopAsyncIteration
        self._bind_loop()
        item = await self._queue.get()
        if item is _CLOSED or self._cancelled:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()


class Topic:
    """A named channel carrying one kind of event."""

    def __init__(self, name: str):
        """Initialize topic."""
        self.name = name
        self._subscribers: List[Subscription] = []
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of live subscriptions."""
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, predicate: Optional[EventPredicate] = None) -> Subscription:
        """
        Open a subscription on this topic.

        Args:
            predicate: Optional per-subscriber filter

        Returns:
            Live Subscription
        """
        subscription = Subscription(self, predicate)
        with self._lock:
            self._subscribers.append(subscription)
        active_subscriptions.labels(topic=self.name).inc()
        logger.debug("Subscribed %s to %s", subscription.id, self.name)
        return subscription

    def publish(self, event: DomainEvent) -> int:
        """
        Broadcast an event to current subscribers.

        Args:
            event: Event to publish

        Returns:
            Number of subscribers the event was delivered to
        """
        with self._lock:
            subscribers = list(self._subscribers)

        events_published_total.labels(topic=self.name).inc()
        delivered = 0
        for subscription in subscribers:
            try:
                accepted = subscription.deliver(event)
            except Exception:
                logger.exception(
                    "Error delivering %s to subscription %s on %s",
                    event.event_type,
                    subscription.id,
                    self.name,
                )
                events_dropped_total.labels(topic=self.name).inc()
                continue
            if accepted:
                delivered += 1

        if delivered:
            events_delivered_total.labels(topic=self.name).inc(delivered)
        logger.debug(
            "Published %s on %s to %d of %d subscriber(s)",
            event.event_type,
            self.name,
            delivered,
            len(subscribers),
        )
        return delivered

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription not in self._subscribers:
                return
            self._subscribers.remove(subscription)
        active_subscriptions.labels(topic=self.name).dec()

    def close(self) -> None:
        """Cancel every subscription on this topic."""
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription.cancel()


class EventBus:
    """
    Registry of named topics.

    One instance is constructed per process (or per test) and injected into
    producers and consumers; there is no module-level bus.
    """

    def __init__(self, topic_names: Optional[List[str]] = None):
        """
        Initialize the event bus.

        Args:
            topic_names: Topics to create up front
        """
        self._topics: Dict[str, Topic] = {}
        self._lock = threading.Lock()
        for name in topic_names or []:
            self.topic(name)

    def topic(self, name: str) -> Topic:
        """Return the topic with the given name, creating it if needed."""
        with self._lock:
            topic = self._topics.get(name)
            if topic is None:
                topic = Topic(name)
                self._topics[name] = topic
            return topic

    @property
    def topic_names(self) -> List[str]:
        """Names of the registered topics."""
        with self._lock:
            return list(self._topics)

    def subscribe(self, name: str, predicate: Optional[EventPredicate] = None) -> Subscription:
        """Subscribe to a topic by name."""
        return self.topic(name).subscribe(predicate)

    def publish(self, name: str, event: DomainEvent) -> int:
        """Publish an event to a topic by name."""
        return self.topic(name).publish(event)

    def close(self) -> None:
        """Cancel all subscriptions on all topics."""
        with self._lock:
            topics = list(self._topics.values())
        for topic in topics:
            topic.close()
        logger.info("Event bus closed (%d topic(s))", len(topics))
