"""Offer catalog and matching engine."""

from loanbot.offers.catalog import CatalogError, OfferCatalog, load_catalog
from loanbot.offers.engine import OfferEngine, match_offers, rank_offer
from loanbot.schemas.offers import OfferRecord, RankedOffer

__all__ = [
    "CatalogError",
    "OfferCatalog",
    "load_catalog",
    "OfferEngine",
    "match_offers",
    "rank_offer",
    "OfferRecord",
    "RankedOffer",
]
