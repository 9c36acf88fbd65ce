"""Tests for the event bus and the audit log subscriber."""

from __future__ import annotations

import asyncio
import uuid
from unittest.mock import patch

import pytest

from loanbot.ops import events
from loanbot.ops.audit import log_event
from loanbot.schemas.events import EventType, SystemEvent


def _event(event_type: EventType = EventType.OFFERS_RANKED, **data) -> SystemEvent:
    return SystemEvent(event_type=event_type, request_id=uuid.uuid4(), data=data, source_module="tests")


@pytest.fixture()
def recorder():
    """Subscribe a recording handler for the duration of a test."""
    received: list[SystemEvent] = []

    async def record(event: SystemEvent) -> None:
        received.append(event)

    yield record, received
    events.unsubscribe(record)


class TestEventBus:
    @pytest.mark.asyncio
    async def test_global_subscriber_receives_events(self, recorder):
        record, received = recorder
        events.subscribe(record)
        await events.start_event_system()

        await events.emit(_event(matched=2))
        await events.stop_event_system()

        assert [e.data for e in received] == [{"matched": 2}]

    @pytest.mark.asyncio
    async def test_failing_handler_isolated(self, recorder):
        record, received = recorder

        async def broken(event: SystemEvent) -> None:
            raise RuntimeError("handler down")

        events.subscribe(broken)
        events.subscribe(record)
        await events.start_event_system()
        try:
            await events.emit(_event())
            await events.emit(_event())
            await events.stop_event_system()
        finally:
            events.unsubscribe(broken)

        assert len(received) == 2

    @pytest.mark.asyncio
    async def test_emit_starts_worker_lazily(self, recorder):
        record, received = recorder
        events.subscribe(record)

        await events.emit(_event())
        await asyncio.wait_for(events._queue.join(), timeout=1)

        assert len(received) == 1
        await events.stop_event_system()

    def test_subscribe_is_idempotent(self, recorder):
        record, _ = recorder
        events.subscribe(record)
        events.subscribe(record)
        assert events._subscribers.count(record) == 1

    def test_unsubscribe(self, recorder):
        record, _ = recorder
        events.subscribe(record)
        events.unsubscribe(record)
        events.unsubscribe(record)
        assert record not in events._subscribers


class TestAuditLog:
    @pytest.mark.asyncio
    async def test_info_level(self):
        with patch("loanbot.ops.audit.audit_log") as mock_log:
            await log_event(_event(matched=3))
        mock_log.info.assert_called_once()
        args, kwargs = mock_log.info.call_args
        assert args == ("offers.ranked",)
        assert kwargs["data_matched"] == 3
        assert kwargs["source"] == "tests"

    @pytest.mark.asyncio
    async def test_internal_failure_logged_as_error(self):
        with patch("loanbot.ops.audit.audit_log") as mock_log:
            await log_event(_event(EventType.INTERNAL_FAILURE, error="RuntimeError"))
        mock_log.error.assert_called_once()
        mock_log.info.assert_not_called()
