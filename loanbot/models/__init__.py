"""Domain enums."""

from loanbot.models.enums import ConversationStep, CreditHistory, LoanType

__all__ = [
    "ConversationStep",
    "CreditHistory",
    "LoanType",
]
