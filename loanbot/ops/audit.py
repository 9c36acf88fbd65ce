"""Audit log subscriber — writes every SystemEvent as a structured log line.

Registered as a global subscriber. Internal failures are logged at error
level so operators can alert on them even though the chat endpoint answers
them with a normal 200 reply.
"""

from __future__ import annotations

import structlog

from loanbot.schemas.events import EventType, SystemEvent

audit_log = structlog.get_logger("loanbot.audit")

_ERROR_EVENTS: frozenset[EventType] = frozenset({EventType.INTERNAL_FAILURE})


async def log_event(event: SystemEvent) -> None:
    """Log one SystemEvent with its payload as key/value pairs."""
    fields = {
        "event_id": str(event.id),
        "request_id": str(event.request_id) if event.request_id else None,
        "source": event.source_module,
        **{f"data_{key}": value for key, value in event.data.items()},
    }
    if event.event_type in _ERROR_EVENTS:
        audit_log.error(event.event_type.value, **fields)
    else:
        audit_log.info(event.event_type.value, **fields)
