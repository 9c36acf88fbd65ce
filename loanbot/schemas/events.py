"""SystemEvent schema — the event type that flows through the event bus.

The state machine, the offer engine, the catalog loader and the request
boundary emit SystemEvents; the audit subscriber turns them into log lines.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """All event types emitted by the system."""

    # Conversation
    SESSION_RESET = "session.reset"
    SESSION_STATE_CHANGED = "session.state_changed"
    SESSION_STATE_REINITIALIZED = "session.state_reinitialized"
    ANSWER_REJECTED = "answer.rejected"

    # Offers
    CATALOG_LOADED = "catalog.loaded"
    OFFERS_RANKED = "offers.ranked"

    # System
    SYSTEM_STARTUP = "system.startup"
    SYSTEM_SHUTDOWN = "system.shutdown"
    INTERNAL_FAILURE = "system.internal_failure"


class SystemEvent(BaseModel):
    """Immutable event record.

    ``request_id`` ties together everything emitted while handling one chat
    request; the server keeps no session, so there is no session id.
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    request_id: uuid.UUID | None = None

    # Flexible payload
    data: dict[str, Any] = Field(default_factory=dict)

    # Metadata
    source_module: str | None = Field(default=None, description="Module that emitted this event")

    model_config = {"frozen": True}
