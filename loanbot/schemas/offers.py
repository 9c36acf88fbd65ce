"""Pydantic schemas for the offer catalog and ranked results.

Pure data classes — no business logic. Wire keys are camelCase
(``termMinMonths``), Python attributes snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = int | float


class OfferRecord(BaseModel):
    """One catalog entry as published by a bank.

    Bounds and rates are optional; a missing bound is unbounded on that side.
    Rates are annual fractions (0.12 = 12%). Unknown keys such as ``url``
    are kept and passed through to ranked results.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    bank: str
    product: str
    type: str                          # "cash" / "auto" / "mortgage" / "refinance"
    amount_min: Number | None = None
    amount_max: Number | None = None
    term_min_months: int | None = None
    term_max_months: int | None = None
    rate_min: float | None = None
    rate_max: float | None = None


class RankedOffer(OfferRecord):
    """Catalog record annotated with figures for one borrower profile.

    Derived fields are computed per ranking call and never cached.
    """

    title: str
    annual_rate: float | None = None
    monthly_payment: float | None = None
    total_pay: float | None = None
    overpay: float | None = None
