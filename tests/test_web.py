"""Tests for the HTTP surface: chat endpoint, health check, failure handling."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from loanbot.conversation.engine import ConversationEngine
from loanbot.conversation.prompts.base import INTERNAL_ERROR_REPLY
from loanbot.conversation.prompts.steps import FIRST_PROMPT, STEP_PROMPTS
from loanbot.main import build_conversation_engine, create_app
from loanbot.models.enums import ConversationStep
from loanbot.offers.catalog import CatalogError
from loanbot.ops import events
from loanbot.ops.audit import log_event
from loanbot.schemas.events import EventType

SCENARIO = ["ипотека", "30", "90000", "24", "хорошо", "да", "500000", "24"]


@pytest.fixture()
def client(catalog):
    """Test client over an app built with the synthetic catalog."""
    app = create_app(catalog=catalog)
    with TestClient(app) as test_client:
        yield test_client


def _chat(client: TestClient, message, state=None) -> dict:
    response = client.post("/api/chat", json={"message": message, "state": state})
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestChat:
    def test_first_answer(self, client):
        body = _chat(client, "ипотека")
        assert body == {
            "reply": STEP_PROMPTS[ConversationStep.AGE],
            "state": {"step": 1, "profile": {"loanType": "mortgage"}},
            "offers": [],
        }

    def test_empty_body_resets(self, client):
        response = client.post("/api/chat")
        assert response.status_code == 200
        assert response.json()["reply"] == FIRST_PROMPT
        assert response.json()["state"] == {"step": 0, "profile": {}}

    def test_full_scenario(self, client):
        state = None
        for message in SCENARIO:
            body = _chat(client, message, state)
            state = body["state"]

        assert state == {
            "step": 8,
            "profile": {
                "loanType": "mortgage",
                "age": 30,
                "income": 90000,
                "employmentMonths": 24,
                "creditHistory": "good",
                "insurance": True,
                "desiredAmount": 500000,
                "desiredMonths": 24,
            },
        }
        offers = body["offers"]
        assert [o["bank"] for o in offers] == ["Gamma", "Beta", "Delta"]
        beta = offers[1]
        assert beta["title"] == "Beta — Home"
        assert beta["url"] == "https://beta.example/home"
        assert beta["annualRate"] == 0.18
        assert beta["monthlyPayment"] > offers[0]["monthlyPayment"]
        assert beta["overpay"] == pytest.approx(beta["totalPay"] - 500000)
        assert offers[2]["monthlyPayment"] is None
        assert offers[2]["totalPay"] is None

    def test_malformed_state_is_replaced(self, client):
        body = _chat(client, "авто", state="garbage")
        assert body["state"] == {"step": 1, "profile": {"loanType": "auto"}}

    def test_huge_number_keeps_progress(self, client):
        body = _chat(client, "1e30", state={"step": 2, "profile": {"loanType": "cash", "age": 30}})
        assert body["reply"] == STEP_PROMPTS[ConversationStep.EMPLOYMENT]
        assert body["state"] == {
            "step": 3,
            "profile": {"loanType": "cash", "age": 30, "income": 10**30},
        }

    def test_numeric_message(self, client):
        body = _chat(client, 30, state={"step": 1, "profile": {"loanType": "cash"}})
        assert body["state"]["profile"]["age"] == 30


class TestInternalFailure:
    def test_failure_becomes_apology(self, client):
        with (
            patch.object(ConversationEngine, "process_message", side_effect=RuntimeError("boom")),
            patch("loanbot.channels.web.emit", new_callable=AsyncMock) as mock_emit,
        ):
            response = client.post("/api/chat", json={"message": "30", "state": {"step": 1, "profile": {"loanType": "cash"}}})

        assert response.status_code == 200
        assert response.json() == {
            "reply": INTERNAL_ERROR_REPLY,
            "state": {"step": 0, "profile": {}},
            "offers": [],
        }
        event = mock_emit.call_args.args[0]
        assert event.event_type == EventType.INTERNAL_FAILURE
        assert event.data == {"error": "RuntimeError"}

    def test_no_internal_detail_leaks(self, client):
        with patch.object(ConversationEngine, "process_message", side_effect=KeyError("secret_key")):
            response = client.post("/api/chat", json={"message": "x"})
        assert "secret_key" not in response.text


class TestStartup:
    def test_audit_subscriber_lives_with_the_app(self, catalog):
        with TestClient(create_app(catalog=catalog)):
            assert log_event in events._subscribers
        assert log_event not in events._subscribers

    def test_bad_catalog_path_is_a_startup_error(self, tmp_path):
        with patch("loanbot.main.settings") as mock_settings:
            mock_settings.catalog.offers_path = tmp_path / "absent.json"
            mock_settings.catalog.vocabulary_path = None
            with pytest.raises(CatalogError, match="Cannot read offer catalog"):
                build_conversation_engine()

    def test_explicit_catalog_skips_file(self, catalog):
        engine = build_conversation_engine(catalog=catalog)
        assert engine.offer_engine.catalog is catalog
