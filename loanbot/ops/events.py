"""In-process event bus for operator visibility.

Async pub/sub of SystemEvents. Emitters never wait on subscribers: events
go onto a queue drained by one background worker.

Usage:
    from loanbot.ops.events import emit

    await emit(SystemEvent(
        event_type=EventType.OFFERS_RANKED,
        request_id=request_id,
        data={"count": 3},
    ))

    # at startup
    subscribe(log_event)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from loanbot.schemas.events import SystemEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[SystemEvent], Coroutine[Any, Any, None]]

# ── Internal state ───────────────────────────────────────────────────

_subscribers: list[EventHandler] = []
_queue: asyncio.Queue[SystemEvent] | None = None
_worker_task: asyncio.Task[None] | None = None


# ── Public API ───────────────────────────────────────────────────────


def subscribe(handler: EventHandler) -> None:
    """Register an async handler for every event. Registering twice is a no-op."""
    if handler not in _subscribers:
        _subscribers.append(handler)
    logger.info("Registered event subscriber: %s", handler.__name__)


def unsubscribe(handler: EventHandler) -> None:
    """Remove a previously registered handler."""
    if handler in _subscribers:
        _subscribers.remove(handler)


async def emit(event: SystemEvent) -> None:
    """Queue a SystemEvent for all subscribers."""
    global _queue
    if _queue is None:
        _queue = asyncio.Queue()
    _ensure_worker()

    _queue.put_nowait(event)
    logger.debug("Event emitted: %s (request=%s)", event.event_type.value, event.request_id)


# ── Background worker ────────────────────────────────────────────────


def _ensure_worker() -> None:
    global _worker_task
    if _worker_task is None or _worker_task.done():
        _worker_task = asyncio.create_task(_event_worker())
        logger.debug("Event worker started")


async def _event_worker() -> None:
    """Drain the queue and dispatch each event to its subscribers."""
    queue = _queue
    if queue is None:
        return

    while True:
        event = await queue.get()
        try:
            await _dispatch(event)
        except Exception:
            logger.exception("Error in event worker")
        finally:
            queue.task_done()


async def _dispatch(event: SystemEvent) -> None:
    handlers = list(_subscribers)
    if not handlers:
        return

    # Failures are isolated per handler
    results = await asyncio.gather(
        *[_safe_call(handler, event) for handler in handlers],
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, Exception):
            logger.error("Event handler failed for %s: %s", event.event_type.value, result)


async def _safe_call(handler: EventHandler, event: SystemEvent) -> None:
    try:
        await handler(event)
    except Exception:
        logger.exception("Handler %s failed for event %s", handler.__name__, event.event_type.value)
        raise


# ── Lifecycle ────────────────────────────────────────────────────────


async def start_event_system() -> None:
    """Create a fresh queue and worker. Call from the app lifespan."""
    global _queue, _worker_task
    _queue = asyncio.Queue()
    _worker_task = None
    _ensure_worker()
    logger.info("Event system started with %d subscribers", len(_subscribers))


async def stop_event_system() -> None:
    """Drain pending events and stop the worker."""
    global _worker_task, _queue

    if _queue is not None and _worker_task is not None and not _worker_task.done():
        await _queue.join()

    if _worker_task is not None and not _worker_task.done():
        _worker_task.cancel()
        try:
            await _worker_task
        except asyncio.CancelledError:
            pass

    _worker_task = None
    _queue = None
    logger.info("Event system stopped")


def reset_event_system() -> None:
    """Forget the queue and worker without awaiting them.

    For callers that switch event loops (tests); the next emit() starts over.
    """
    global _worker_task, _queue
    _worker_task = None
    _queue = None
