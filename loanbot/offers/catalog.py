"""Offer catalog — the read-only list of bank offers.

Built once at startup and shared by every request. Nothing mutates it
afterwards, so concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from loanbot.schemas.offers import OfferRecord

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[OfferRecord])


class CatalogError(Exception):
    """The offer catalog document is missing or invalid."""


class OfferCatalog:
    """Immutable, ordered collection of OfferRecords.

    Order is significant: ranking is stable, so catalog order breaks ties.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[OfferRecord] = ()) -> None:
        self._records: tuple[OfferRecord, ...] = tuple(records)

    @classmethod
    def from_dicts(cls, raw: Iterable[Mapping[str, Any]]) -> OfferCatalog:
        """Validate plain dicts (camelCase keys, as in the JSON file)."""
        return cls(OfferRecord.model_validate(item) for item in raw)

    @property
    def records(self) -> tuple[OfferRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[OfferRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"OfferCatalog({len(self._records)} offers)"


def load_catalog(path: Path) -> OfferCatalog:
    """Read and validate the catalog JSON array at ``path``.

    Raises:
        CatalogError: The file is unreadable, not JSON, or a record is invalid.
    """
    try:
        payload = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read offer catalog {path}: {exc}"
        raise CatalogError(msg) from exc

    try:
        records = _RECORDS_ADAPTER.validate_json(payload)
    except ValidationError as exc:
        msg = f"Invalid offer catalog {path}: {exc.error_count()} error(s)"
        raise CatalogError(msg) from exc

    catalog = OfferCatalog(records)
    logger.info("Loaded %d offers from %s", len(catalog), path)
    return catalog
