"""Finite state machine for the question sequence.

The FSM validates transitions and emits state-change events. Answer
parsing happens in the engine; only the FSM moves the step.
"""

from __future__ import annotations

import logging
import uuid

from loanbot.conversation.states import TERMINAL_STEPS, TRANSITIONS, UNIVERSAL_TRANSITIONS
from loanbot.models.enums import ConversationStep
from loanbot.ops.events import emit
from loanbot.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)


class FSM:
    """Tracks the step of one conversation for the duration of a request."""

    def __init__(
        self,
        request_id: uuid.UUID | None = None,
        initial_step: ConversationStep = ConversationStep.LOAN_TYPE,
    ) -> None:
        self.request_id = request_id
        self.current_step = initial_step

    async def transition(self, trigger: str) -> ConversationStep:
        """Execute a transition.

        Args:
            trigger: ``answered``, ``refresh`` or ``reset``.

        Returns:
            The step after the transition.

        Raises:
            ValueError: If the trigger is not valid from the current step.
        """
        old_step = self.current_step

        if trigger in UNIVERSAL_TRANSITIONS:
            self.current_step = UNIVERSAL_TRANSITIONS[trigger]
        else:
            step_transitions = TRANSITIONS.get(self.current_step, {})
            if trigger not in step_transitions:
                msg = (
                    f"Invalid transition: {self.current_step.name} --{trigger}--> ??? "
                    f"(valid: {list(step_transitions.keys())})"
                )
                raise ValueError(msg)
            self.current_step = step_transitions[trigger]

        logger.info(
            "Step transition: %s --%s--> %s (request=%s)",
            old_step.name,
            trigger,
            self.current_step.name,
            self.request_id,
        )

        await emit(SystemEvent(
            event_type=EventType.SESSION_RESET if trigger == "reset" else EventType.SESSION_STATE_CHANGED,
            request_id=self.request_id,
            data={
                "from_step": int(old_step),
                "to_step": int(self.current_step),
                "trigger": trigger,
            },
            source_module="conversation.fsm",
        ))

        return self.current_step

    @property
    def is_terminal(self) -> bool:
        return self.current_step in TERMINAL_STEPS
