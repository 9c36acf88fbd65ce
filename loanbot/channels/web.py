"""JSON chat endpoint.

Handles:
- POST /api/chat → one conversation turn

Every request that parses gets a 200 with a reply. Unexpected failures are
logged, emitted as ``system.internal_failure`` and answered with an apology
and a fresh state.
"""
# ruff: noqa: B008  — Depends() in function defaults is standard FastAPI

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Request

from loanbot.conversation.engine import ConversationEngine
from loanbot.conversation.prompts.base import INTERNAL_ERROR_REPLY
from loanbot.ops.events import emit
from loanbot.schemas.conversation import ChatRequest, ChatResponse, ConversationState
from loanbot.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)

chat_router = APIRouter(prefix="/api", tags=["chat"])


def get_conversation_engine(request: Request) -> ConversationEngine:
    """The engine built in the app lifespan."""
    return request.app.state.conversation_engine


@chat_router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest | None = None,
    engine: ConversationEngine = Depends(get_conversation_engine),
) -> ChatResponse:
    """Process one message against the caller's state."""
    body = body or ChatRequest()
    request_id = uuid.uuid4()

    try:
        return await engine.process_message(body.message, body.state, request_id=request_id)
    except Exception as exc:
        logger.exception("Chat request failed (request=%s)", request_id)
        await emit(SystemEvent(
            event_type=EventType.INTERNAL_FAILURE,
            request_id=request_id,
            data={"error": type(exc).__name__},
            source_module="channels.web",
        ))
        return ChatResponse(reply=INTERNAL_ERROR_REPLY, state=ConversationState())
