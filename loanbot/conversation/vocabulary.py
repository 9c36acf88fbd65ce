"""Answer vocabulary — synonym tables and command keywords.

Kept as data so another locale can be dropped in through a JSON file
(``VOCABULARY_PATH``) without touching the normalizers. All keys are
stored trimmed and lower-cased.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from loanbot.models.enums import CreditHistory, LoanType

logger = logging.getLogger(__name__)


def _fold(token: str) -> str:
    return token.strip().lower()


class Vocabulary(BaseModel):
    """Words the bot understands, per answer kind."""

    model_config = ConfigDict(frozen=True)

    yes: frozenset[str]
    no: frozenset[str]
    loan_types: dict[str, LoanType]
    credit_history: dict[str, CreditHistory]
    reset_keywords: frozenset[str]
    refresh_keywords: frozenset[str]

    @field_validator("yes", "no", "reset_keywords", "refresh_keywords")
    @classmethod
    def _fold_tokens(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(_fold(token) for token in v)

    @field_validator("loan_types", "credit_history")
    @classmethod
    def _fold_keys(cls, v: dict[str, object]) -> dict[str, object]:
        return {_fold(key): value for key, value in v.items()}


DEFAULT_VOCABULARY = Vocabulary(
    yes=frozenset({"да", "y", "yes", "true", "1"}),
    no=frozenset({"нет", "n", "no", "false", "0"}),
    loan_types={
        "наличными": LoanType.CASH,
        "кредит наличными": LoanType.CASH,
        "cash": LoanType.CASH,
        "авто": LoanType.AUTO,
        "автокредит": LoanType.AUTO,
        "auto": LoanType.AUTO,
        "ипотека": LoanType.MORTGAGE,
        "mortgage": LoanType.MORTGAGE,
        "рефинанс": LoanType.REFINANCE,
        "рефинансирование": LoanType.REFINANCE,
        "refinance": LoanType.REFINANCE,
    },
    credit_history={
        "хорошо": CreditHistory.GOOD,
        "good": CreditHistory.GOOD,
        "средне": CreditHistory.AVG,
        "avg": CreditHistory.AVG,
        "плохо": CreditHistory.BAD,
        "bad": CreditHistory.BAD,
    },
    reset_keywords=frozenset({"сброс", "/reset"}),
    refresh_keywords=frozenset({"ещё", "еще"}),
)


def load_vocabulary(path: Path | None) -> Vocabulary:
    """Load a vocabulary file, or return the built-in one when path is None.

    Raises:
        OSError: The file cannot be read.
        pydantic.ValidationError: The file does not describe a Vocabulary.
    """
    if path is None:
        return DEFAULT_VOCABULARY
    vocabulary = Vocabulary.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded vocabulary from %s (%d loan type synonyms, %d credit history synonyms)",
        path,
        len(vocabulary.loan_types),
        len(vocabulary.credit_history),
    )
    return vocabulary
