"""Domain enums used across pydantic schemas and the conversation flow.

String enums serialize to their canonical wire values.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class LoanType(str, Enum):
    """Loan product family — matched against the catalog record type."""

    CASH = "cash"
    AUTO = "auto"
    MORTGAGE = "mortgage"
    REFINANCE = "refinance"


class CreditHistory(str, Enum):
    """Self-assessed credit history grade."""

    GOOD = "good"
    AVG = "avg"
    BAD = "bad"


class ConversationStep(IntEnum):
    """Position in the fixed question sequence. OFFERS_SHOWN is terminal."""

    LOAN_TYPE = 0
    AGE = 1
    INCOME = 2
    EMPLOYMENT = 3
    CREDIT_HISTORY = 4
    INSURANCE = 5
    AMOUNT = 6
    TERM = 7
    OFFERS_SHOWN = 8
