"""Question sequence, transition map and per-step answer readers.

Steps 0–7 each collect one profile field; OFFERS_SHOWN is terminal and only
accepts the refresh trigger. ``reset`` is valid from anywhere.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loanbot.conversation.normalizers import (
    parse_credit_history,
    parse_loan_type,
    parse_number,
    parse_yes_no,
    round_half_up,
)
from loanbot.conversation.vocabulary import Vocabulary
from loanbot.models.enums import ConversationStep

# Transition map: {current_step: {trigger_name: next_step}}
TRANSITIONS: dict[ConversationStep, dict[str, ConversationStep]] = {
    ConversationStep.LOAN_TYPE: {"answered": ConversationStep.AGE},
    ConversationStep.AGE: {"answered": ConversationStep.INCOME},
    ConversationStep.INCOME: {"answered": ConversationStep.EMPLOYMENT},
    ConversationStep.EMPLOYMENT: {"answered": ConversationStep.CREDIT_HISTORY},
    ConversationStep.CREDIT_HISTORY: {"answered": ConversationStep.INSURANCE},
    ConversationStep.INSURANCE: {"answered": ConversationStep.AMOUNT},
    ConversationStep.AMOUNT: {"answered": ConversationStep.TERM},
    ConversationStep.TERM: {"answered": ConversationStep.OFFERS_SHOWN},
    ConversationStep.OFFERS_SHOWN: {"refresh": ConversationStep.OFFERS_SHOWN},
}

UNIVERSAL_TRANSITIONS: dict[str, ConversationStep] = {
    "reset": ConversationStep.LOAN_TYPE,
}

TERMINAL_STEPS: frozenset[ConversationStep] = frozenset({ConversationStep.OFFERS_SHOWN})

AnswerReader = Callable[[str, Vocabulary], object | None]


@dataclass(frozen=True)
class StepField:
    """Profile attribute filled at a step and how to read it from text."""

    field: str
    read: AnswerReader


def _number_reader(low: float, high: float | None = None) -> AnswerReader:
    """Reader accepting a number in [low, high], checked before rounding."""

    def read(text: str, vocabulary: Vocabulary) -> int | None:
        value = parse_number(text)
        if value is None or value < low or (high is not None and value > high):
            return None
        return round_half_up(value)

    return read


STEP_FIELDS: dict[ConversationStep, StepField] = {
    ConversationStep.LOAN_TYPE: StepField("loan_type", parse_loan_type),
    ConversationStep.AGE: StepField("age", _number_reader(14, 100)),
    ConversationStep.INCOME: StepField("income", _number_reader(5000)),
    ConversationStep.EMPLOYMENT: StepField("employment_months", _number_reader(0)),
    ConversationStep.CREDIT_HISTORY: StepField("credit_history", parse_credit_history),
    ConversationStep.INSURANCE: StepField("insurance", parse_yes_no),
    ConversationStep.AMOUNT: StepField("desired_amount", _number_reader(1000)),
    ConversationStep.TERM: StepField("desired_months", _number_reader(3)),
}
