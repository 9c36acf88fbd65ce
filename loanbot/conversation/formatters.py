"""ru-RU display formatting for reply texts."""

from __future__ import annotations

from decimal import Decimal

from loanbot.conversation.normalizers import round_half_up

NBSP = "\u00a0"


def format_rub(value: Decimal | float | int | None) -> str:
    """Format as whole roubles, ru-RU style: 500000 -> "500 000 ₽".

    Groups and the currency sign are separated by no-break spaces.
    """
    if value is None:
        return "-"
    # US grouping 1,234 -> ru 1 234
    grouped = f"{round_half_up(value):,}".replace(",", NBSP)
    return f"{grouped}{NBSP}₽"
