"""Sequential companion reaction queue"""

import asyncio
import heapq
import inspect
import itertools
import logging
from collections import deque
from enum import Enum
from typing import Any, Awaitable, Callable, Deque, List, Optional, Tuple
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.companion.reactions import generate_reaction, required_categories
from smartspend_companion.domain.models import CompanionEvent, CompanionEventType, CompanionReaction
from smartspend_companion.infrastructure.observability.logging import log_reaction
from smartspend_companion.infrastructure.observability.metrics import (
    queue_depth_gauge,
    reactions_dropped_counter,
    record_reaction,
)

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_MS = 500

ReactionHandler = Callable[[CompanionReaction], Any]
OrderKey = Callable[[CompanionEvent], Any]


def fifo_order(event: CompanionEvent) -> int:
    """Every event has equal priority: pure arrival order"""
    return 0


_SEVERITY = {CompanionEventType.OVERSPENDING: 0}


def severity_order(event: CompanionEvent) -> int:
    """Overspending alerts jump ahead of everything else; FIFO within a level"""
    return _SEVERITY.get(event.type, 1)


class QueueState(str, Enum):
    IDLE = "idle"
    DRAINING = "draining"


class Subscription:
    """Handle returned by ReactionQueue.on_reaction"""

    def __init__(self, queue: "ReactionQueue", handler: ReactionHandler):
        self._queue = queue
        self.handler = handler

    @property
    def active(self) -> bool:
        return self.handler in self._queue._handlers

    def unsubscribe(self) -> None:
        if self.active:
            self._queue._handlers.remove(self.handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class RecentReactions:
    """Bounded log of emitted reactions, newest last, for polling clients"""

    def __init__(self, limit: int = 20):
        self._reactions: Deque[CompanionReaction] = deque(maxlen=limit)

    def __call__(self, reaction: CompanionReaction) -> None:
        self._reactions.append(reaction)

    def snapshot(self) -> List[CompanionReaction]:
        return list(self._reactions)


class ReactionQueue:
    """
    Single-consumer dispatcher that narrates companion events one at a time.

    State machine:
    - Idle: nothing pending, no drain task
    - Draining: pop the next event, emit its reaction, hold for
      duration_ms + buffer_ms, repeat until empty

    enqueue() never preempts the reaction on screen; it only appends. Ordering
    is decided solely by `order_key` (FIFO by default), so a priority policy
    can be swapped in without touching the drain loop.
    """

    def __init__(
        self,
        dialogue: Optional[DialogueBank] = None,
        *,
        buffer_ms: int = DEFAULT_BUFFER_MS,
        max_pending: Optional[int] = None,
        order_key: OrderKey = fifo_order,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        name: str = "default",
    ):
        if max_pending is not None and max_pending < 1:
            raise ValueError("max_pending must be at least 1")
        self.dialogue = dialogue or DialogueBank()
        missing = required_categories() - set(self.dialogue.categories)
        if missing:
            raise ValueError(f"Dialogue bank is missing reaction categories: {', '.join(sorted(missing))}")
        self.name = name
        self._depth = queue_depth_gauge.labels(queue=name)
        self.buffer_ms = buffer_ms
        self.max_pending = max_pending
        self._order_key = order_key
        self._sleep = sleep
        self._pending: List[Tuple[Any, int, CompanionEvent]] = []
        self._sequence = itertools.count()
        self._handlers: List[ReactionHandler] = []
        self._draining = False
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def is_draining(self) -> bool:
        return self._draining

    @property
    def state(self) -> QueueState:
        return QueueState.DRAINING if self._draining else QueueState.IDLE

    def on_reaction(self, handler: ReactionHandler) -> Subscription:
        """
        Register a callback invoked with every emitted reaction.

        Coroutine functions are awaited before the reaction's hold begins.
        """
        self._handlers.append(handler)
        return Subscription(self, handler)

    def enqueue(self, event: CompanionEvent) -> None:
        """
        Append an event and start draining if idle.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()

        if self.max_pending is not None and len(self._pending) >= self.max_pending:
            self._drop_oldest()

        heapq.heappush(self._pending, (self._order_key(event), next(self._sequence), event))
        self._depth.set(len(self._pending))

        if not self._draining:
            self._draining = True
            self._task = loop.create_task(self._drain())

    async def join(self) -> None:
        """Wait until every pending event has been emitted and held"""
        while self._task is not None:
            await asyncio.shield(self._task)

    async def aclose(self) -> None:
        """Stop the drain task on host shutdown; pending events are kept"""
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def _drop_oldest(self) -> None:
        oldest = min(self._pending, key=lambda entry: entry[1])
        self._pending.remove(oldest)
        heapq.heapify(self._pending)
        reactions_dropped_counter.inc()
        logger.warning(
            "Reaction queue full, dropping oldest event",
            extra={"event_type": oldest[2].type.value, "max_pending": self.max_pending},
        )

    async def _drain(self) -> None:
        try:
            while self._pending:
                _, _, event = heapq.heappop(self._pending)
                self._depth.set(len(self._pending))

                try:
                    reaction = generate_reaction(event, self.dialogue)
                except Exception:
                    logger.exception("Could not build reaction, skipping event", extra={"event_type": event.type.value})
                    continue

                await self._emit(event, reaction)

                await self._sleep((reaction.duration_ms + self.buffer_ms) / 1000)
        finally:
            self._draining = False
            self._task = None

    async def _emit(self, event: CompanionEvent, reaction: CompanionReaction) -> None:
        record_reaction(reaction.kind.value)
        log_reaction(event.type.value, reaction.pose.value, reaction.kind.value, reaction.duration_ms)

        for handler in list(self._handlers):
            try:
                result = handler(reaction)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Reaction handler failed", extra={"event_type": event.type.value})
