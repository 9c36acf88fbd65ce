"""Shared fixtures: synthetic catalogs, engines, event bus isolation."""

from __future__ import annotations

import pytest

from loanbot.conversation.engine import ConversationEngine
from loanbot.offers.catalog import OfferCatalog
from loanbot.offers.engine import OfferEngine
from loanbot.ops import events

SAMPLE_OFFERS = [
    {
        "bank": "Alpha",
        "product": "Cash Plus",
        "type": "cash",
        "amountMin": 30000,
        "amountMax": 3000000,
        "termMinMonths": 3,
        "termMaxMonths": 60,
        "rateMin": 0.2,
        "rateMax": 0.3,
    },
    {
        "bank": "Beta",
        "product": "Home",
        "type": "mortgage",
        "amountMin": 300000,
        "termMinMonths": 12,
        "termMaxMonths": 360,
        "rateMin": 0.18,
        "url": "https://beta.example/home",
    },
    {
        "bank": "Gamma",
        "product": "Family Home",
        "type": "mortgage",
        "amountMin": 100000,
        "amountMax": 20000000,
        "rateMax": 0.06,
    },
    {
        "bank": "Delta",
        "product": "Mortgage Flex",
        "type": "mortgage",
        "termMaxMonths": 240,
    },
    {
        "bank": "Epsilon",
        "product": "Drive",
        "type": "auto",
        "amountMin": 100000,
        "amountMax": 5000000,
        "termMinMonths": 12,
        "termMaxMonths": 84,
        "rateMin": 0.15,
    },
]


@pytest.fixture(autouse=True)
def _isolated_event_bus():
    """Each test gets its own event loop, so the bus must start from scratch."""
    events.reset_event_system()
    yield
    events.reset_event_system()


@pytest.fixture()
def catalog() -> OfferCatalog:
    return OfferCatalog.from_dicts(SAMPLE_OFFERS)


@pytest.fixture()
def offer_engine(catalog: OfferCatalog) -> OfferEngine:
    return OfferEngine(catalog)


@pytest.fixture()
def engine(offer_engine: OfferEngine) -> ConversationEngine:
    return ConversationEngine(offer_engine)
