"""Shared reply texts: commands, help and the failure apology.

All user-facing text is Russian, matching the default vocabulary.
"""

from __future__ import annotations

REFRESH_REPLY = "Обновил список предложений."

HELP_REPLY = "Напишите “сброс”, чтобы начать заново, или “ещё”, чтобы обновить предложения."

INTERNAL_ERROR_REPLY = "Ошибка сервера. Напишите “сброс” и попробуйте снова."
