"""Offer matching engine — filters the catalog for a profile and ranks it.

Pure Python over the in-memory catalog. No I/O besides the ranking event.
"""

from __future__ import annotations

import logging
import math
import uuid

from loanbot.calculators.payment import amortized_payment, overpayment, total_payable
from loanbot.offers.catalog import OfferCatalog
from loanbot.ops.events import emit
from loanbot.schemas.conversation import Profile
from loanbot.schemas.events import EventType, SystemEvent
from loanbot.schemas.offers import Number, OfferRecord, RankedOffer

logger = logging.getLogger(__name__)

# Shorter terms are not quoted with a payment figure
MIN_PAYMENT_TERM_MONTHS = 3


def _within(value: float, low: Number | None, high: Number | None) -> bool:
    """Inclusive range check; a None bound is open on that side."""
    return (low is None or value >= low) and (high is None or value <= high)


def _matches(record: OfferRecord, profile: Profile, amount: float, months: int) -> bool:
    if profile.loan_type is not None and record.type != profile.loan_type.value:
        return False
    return _within(amount, record.amount_min, record.amount_max) and _within(
        months, record.term_min_months, record.term_max_months
    )


def _payment_figures(amount: float, annual_rate: float, months: int) -> tuple[float, float, float] | None:
    """Monthly payment, total and overpay, or None outside float range."""
    try:
        monthly_payment = amortized_payment(amount, annual_rate, months)
        total_pay = total_payable(monthly_payment, months)
        overpay = overpayment(total_pay, amount)
    except OverflowError:
        return None
    if not all(math.isfinite(figure) for figure in (monthly_payment, total_pay, overpay)):
        return None
    return monthly_payment, total_pay, overpay


def rank_offer(record: OfferRecord, amount: float, months: int) -> RankedOffer:
    """Annotate one record with rate, payment, total and overpay.

    The payment uses the lowest published rate (``rate_min``), falling back
    to ``rate_max``. Without a rate, a positive amount and a term of at
    least three months, or when a figure is not finite, the money fields
    stay None.
    """
    annual_rate = record.rate_min if record.rate_min is not None else record.rate_max

    figures = None
    if annual_rate is not None and amount > 0 and months >= MIN_PAYMENT_TERM_MONTHS:
        figures = _payment_figures(amount, annual_rate, months)
    monthly_payment, total_pay, overpay = figures or (None, None, None)

    return RankedOffer.model_validate({
        **record.model_dump(),
        "title": f"{record.bank} — {record.product}",
        "annual_rate": annual_rate,
        "monthly_payment": monthly_payment,
        "total_pay": total_pay,
        "overpay": overpay,
    })


def _payment_sort_key(offer: RankedOffer) -> tuple[bool, float]:
    # Offers without a payment go last
    return (offer.monthly_payment is None, offer.monthly_payment or 0.0)


def match_offers(profile: Profile, catalog: OfferCatalog) -> list[RankedOffer]:
    """Filter ``catalog`` by the profile's loan type, amount and term, then
    rank by monthly payment, cheapest first.

    Missing amount or term count as 0. Ties keep catalog order.
    An empty list means nothing matched.
    """
    amount = profile.desired_amount or 0
    months = profile.desired_months or 0

    ranked = [
        rank_offer(record, amount, months)
        for record in catalog
        if _matches(record, profile, amount, months)
    ]
    ranked.sort(key=_payment_sort_key)
    return ranked


class OfferEngine:
    """Ranks offers from one catalog, fixed at construction."""

    def __init__(self, catalog: OfferCatalog) -> None:
        self.catalog = catalog

    async def rank(self, profile: Profile, request_id: uuid.UUID | None = None) -> list[RankedOffer]:
        """Match and rank offers for ``profile``, recording the outcome."""
        offers = match_offers(profile, self.catalog)
        logger.info(
            "Ranked %d of %d offers (type=%s, amount=%s, months=%s, request=%s)",
            len(offers),
            len(self.catalog),
            profile.loan_type.value if profile.loan_type else None,
            profile.desired_amount,
            profile.desired_months,
            request_id,
        )

        await emit(SystemEvent(
            event_type=EventType.OFFERS_RANKED,
            request_id=request_id,
            data={
                "loan_type": profile.loan_type.value if profile.loan_type else None,
                "matched": len(offers),
                "catalog_size": len(self.catalog),
                "best_payment": offers[0].monthly_payment if offers else None,
            },
            source_module="offers.engine",
        ))

        return offers
