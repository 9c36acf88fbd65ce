"""Free-text answer normalizers.

Every function here is total: any input, including None, yields a value or
None ("unknown"). Nothing raises.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

from loanbot.conversation.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from loanbot.models.enums import CreditHistory, LoanType

_WHITESPACE = re.compile(r"\s+")


def _fold(text: object) -> str:
    if text is None:
        return ""
    return str(text).strip().lower()


def parse_number(text: object) -> float | None:
    """Parse "85 000" or "12,5" style input into a finite float.

    All whitespace is dropped and the first comma is read as a decimal point.
    Returns None for anything unparsable, NaN or infinite.
    """
    raw = _WHITESPACE.sub("", "" if text is None else str(text)).replace(",", ".", 1)
    if not raw or "_" in raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_yes_no(text: object, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool | None:
    """Map an affirmative/negative token to True/False, anything else to None."""
    token = _fold(text)
    if token in vocabulary.yes:
        return True
    if token in vocabulary.no:
        return False
    return None


def parse_loan_type(text: object, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> LoanType | None:
    return vocabulary.loan_types.get(_fold(text))


def parse_credit_history(
    text: object, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> CreditHistory | None:
    return vocabulary.credit_history.get(_fold(text))


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, halves away from zero: 29.5 -> 30.

    Exact for any finite float, however many digits it has.
    """
    return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))
