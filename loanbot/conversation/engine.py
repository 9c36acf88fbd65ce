"""Conversation orchestrator — one chat turn in, one reply out.

Stateless across requests: the caller sends back the ConversationState it
got last time. A turn either handles a command (reset, refresh), rejects
the answer with the step's hint, or stores it and moves to the next step.
Finishing the last step ranks the offers.
"""

from __future__ import annotations

import logging
import uuid

from pydantic import ValidationError

from loanbot.conversation.fsm import FSM
from loanbot.conversation.prompts.base import HELP_REPLY, REFRESH_REPLY
from loanbot.conversation.prompts.result import format_summary
from loanbot.conversation.prompts.steps import FIRST_PROMPT, STEP_HINTS, STEP_PROMPTS
from loanbot.conversation.states import STEP_FIELDS
from loanbot.conversation.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from loanbot.offers.engine import OfferEngine
from loanbot.ops.events import emit
from loanbot.schemas.conversation import ChatResponse, ConversationState
from loanbot.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)


def _message_text(message: object) -> str:
    if message is None:
        return ""
    return str(message).strip()


class ConversationEngine:
    """Drives profile collection and hands finished profiles to the offer engine."""

    def __init__(self, offer_engine: OfferEngine, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self.offer_engine = offer_engine
        self.vocabulary = vocabulary

    def is_reset(self, text: str) -> bool:
        """Empty input, the reset keyword and /reset all restart the flow."""
        return not text or text.lower() in self.vocabulary.reset_keywords

    def is_refresh(self, text: str) -> bool:
        return text.lower() in self.vocabulary.refresh_keywords

    async def coerce_state(self, raw: object, request_id: uuid.UUID | None = None) -> ConversationState:
        """Validate caller-supplied state, falling back to a fresh one.

        Anything that is not a well-formed ConversationState (wrong shape,
        out-of-range values, fields inconsistent with the step) is replaced.
        """
        if raw is None:
            return ConversationState()
        try:
            return ConversationState.model_validate(raw).model_copy(deep=True)
        except ValidationError as exc:
            logger.debug("Discarding malformed state (request=%s): %s", request_id, exc)
            await emit(SystemEvent(
                event_type=EventType.SESSION_STATE_REINITIALIZED,
                request_id=request_id,
                data={"errors": exc.error_count()},
                source_module="conversation.engine",
            ))
            return ConversationState()

    async def process_message(
        self,
        message: object,
        state: object = None,
        request_id: uuid.UUID | None = None,
    ) -> ChatResponse:
        """Handle one chat turn.

        Args:
            message: User text; None and blank count as a reset.
            state: Whatever the caller sent back as state.
            request_id: Correlation id for logs and events.

        Returns:
            ChatResponse with the reply, the new state and any offers.
        """
        text = _message_text(message)
        working = await self.coerce_state(state, request_id)
        fsm = FSM(request_id=request_id, initial_step=working.step)

        if self.is_reset(text):
            await fsm.transition("reset")
            return ChatResponse(reply=FIRST_PROMPT, state=ConversationState())

        if fsm.is_terminal:
            if not self.is_refresh(text):
                return ChatResponse(reply=HELP_REPLY, state=working)
            await fsm.transition("refresh")
            offers = await self.offer_engine.rank(working.profile, request_id)
            return ChatResponse(reply=REFRESH_REPLY, state=working, offers=offers)

        return await self._handle_answer(fsm, working, text)

    async def _handle_answer(self, fsm: FSM, working: ConversationState, text: str) -> ChatResponse:
        """Store the answer for the current step, or repeat the step's hint."""
        step = fsm.current_step
        step_field = STEP_FIELDS[step]

        value = step_field.read(text, self.vocabulary)
        if value is None:
            logger.info("Rejected answer at step %s (request=%s)", step.name, fsm.request_id)
            await emit(SystemEvent(
                event_type=EventType.ANSWER_REJECTED,
                request_id=fsm.request_id,
                data={"step": int(step), "field": step_field.field},
                source_module="conversation.engine",
            ))
            return ChatResponse(reply=STEP_HINTS[step], state=working)

        profile = working.profile.model_copy(update={step_field.field: value})
        next_step = await fsm.transition("answered")
        new_state = ConversationState(step=next_step, profile=profile)

        if not fsm.is_terminal:
            return ChatResponse(reply=STEP_PROMPTS[next_step], state=new_state)

        offers = await self.offer_engine.rank(profile, fsm.request_id)
        return ChatResponse(reply=format_summary(profile, offers), state=new_state, offers=offers)
