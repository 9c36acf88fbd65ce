"""Summary shown once the last answer is in."""

from __future__ import annotations

from loanbot.conversation.formatters import format_rub
from loanbot.models.enums import LoanType
from loanbot.schemas.conversation import Profile
from loanbot.schemas.offers import RankedOffer

LOAN_TYPE_LABELS: dict[LoanType, str] = {
    LoanType.CASH: "Наличными",
    LoanType.AUTO: "Авто",
    LoanType.MORTGAGE: "Ипотека",
    LoanType.REFINANCE: "Рефинанс",
}

OFFERS_FOOTER = (
    "Показал предложения с цифрами и ссылкой на первоисточник.\n"
    "Платёж рассчитан по минимальной ставке из диапазона (если банк её публикует)."
)

NO_OFFERS_FOOTER = (
    "Подходящих предложений не нашлось. "
    "Напишите “сброс” и попробуйте другую сумму или срок."
)


def format_summary(profile: Profile, offers: list[RankedOffer]) -> str:
    """Build the deterministic completion message for a finished profile."""
    label = LOAN_TYPE_LABELS.get(profile.loan_type, "-") if profile.loan_type else "-"
    lines = [
        f"Тип кредита: {label}.",
        f"Сумма: {format_rub(profile.desired_amount)} • Срок: {profile.desired_months} мес.",
        "",
        OFFERS_FOOTER if offers else NO_OFFERS_FOOTER,
    ]
    return "\n".join(lines)
