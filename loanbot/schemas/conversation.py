"""Pydantic schemas for the chat exchange: profile, state, request, response.

The caller owns ConversationState between requests and sends it back on
every call, so these models double as the validation layer for whatever
the client resubmits.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from loanbot.models.enums import ConversationStep, CreditHistory, LoanType
from loanbot.schemas.offers import RankedOffer

# Profile attribute collected at each step, indexed by ConversationStep value.
PROFILE_FIELD_ORDER: tuple[str, ...] = (
    "loan_type",
    "age",
    "income",
    "employment_months",
    "credit_history",
    "insurance",
    "desired_amount",
    "desired_months",
)


class Profile(BaseModel):
    """Borrower answers accumulated so far. Unanswered fields are None."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    loan_type: LoanType | None = None
    age: int | None = Field(default=None, ge=14, le=100)
    income: int | None = Field(default=None, ge=5000)
    employment_months: int | None = Field(default=None, ge=0)
    credit_history: CreditHistory | None = None
    insurance: bool | None = None
    desired_amount: int | None = Field(default=None, ge=1000)
    desired_months: int | None = Field(default=None, ge=3)

    @model_serializer(mode="wrap")
    def _omit_unanswered(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}

    def answered_fields(self) -> list[str]:
        """Names of the fields that hold an answer, in question order."""
        return [name for name in PROFILE_FIELD_ORDER if getattr(self, name) is not None]


class ConversationState(BaseModel):
    """Step position plus the profile collected up to it.

    A field for step i is present iff step > i; anything else is rejected
    so the engine can start over with a fresh state.
    """

    model_config = ConfigDict(populate_by_name=True)

    step: ConversationStep = ConversationStep.LOAN_TYPE
    profile: Profile = Field(default_factory=Profile)

    @model_validator(mode="after")
    def _check_answered_fields(self) -> ConversationState:
        for index, name in enumerate(PROFILE_FIELD_ORDER):
            answered = getattr(self.profile, name) is not None
            if answered != (self.step > index):
                msg = f"Profile field {name!r} does not match step {int(self.step)}"
                raise ValueError(msg)
        return self


class ChatRequest(BaseModel):
    """Incoming chat turn.

    Both parts are loosely typed: a bad state is swapped for a fresh one
    and the message is stringified.
    """

    message: Any = None
    state: Any = None


class ChatResponse(BaseModel):
    """Reply text, the state to send back next time, and any offers."""

    reply: str
    state: ConversationState
    offers: list[RankedOffer] = Field(default_factory=list)
