"""Question asked at each step and the hint repeated when an answer is rejected."""

from __future__ import annotations

from loanbot.models.enums import ConversationStep

STEP_PROMPTS: dict[ConversationStep, str] = {
    ConversationStep.LOAN_TYPE: "Привет! Выберите тип кредита: наличными / авто / ипотека / рефинанс",
    ConversationStep.AGE: "Сколько вам лет?",
    ConversationStep.INCOME: "Какой у вас ежемесячный доход (в рублях, после налогов)?",
    ConversationStep.EMPLOYMENT: "Какой стаж на текущем месте работы (в месяцах)?",
    ConversationStep.CREDIT_HISTORY: "Как оцените кредитную историю? (хорошо / средне / плохо)",
    ConversationStep.INSURANCE: "Страховка подключается? (да / нет)",
    ConversationStep.AMOUNT: "Какую сумму хотите? (в рублях)",
    ConversationStep.TERM: "На какой срок? (в месяцах)",
}

STEP_HINTS: dict[ConversationStep, str] = {
    ConversationStep.LOAN_TYPE: "Напишите один из вариантов: наличными / авто / ипотека / рефинанс",
    ConversationStep.AGE: "Введите возраст числом (например 29).",
    ConversationStep.INCOME: "Введите доход числом (например 85000).",
    ConversationStep.EMPLOYMENT: "Введите стаж числом в месяцах (например 18).",
    ConversationStep.CREDIT_HISTORY: "Напишите: хорошо / средне / плохо",
    ConversationStep.INSURANCE: "Ответьте “да” или “нет”.",
    ConversationStep.AMOUNT: "Введите сумму числом (например 300000).",
    ConversationStep.TERM: "Введите срок числом в месяцах (например 24).",
}

FIRST_PROMPT = STEP_PROMPTS[ConversationStep.LOAN_TYPE]
