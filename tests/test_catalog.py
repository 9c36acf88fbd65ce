"""Tests for offer catalog construction and loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from loanbot.offers import CatalogError, OfferCatalog, OfferRecord, load_catalog

SHIPPED_CATALOG = Path(__file__).resolve().parents[1] / "bank_offers.json"


class TestOfferCatalog:
    def test_preserves_order(self, catalog) -> None:
        assert [r.bank for r in catalog] == ["Alpha", "Beta", "Gamma", "Delta", "Epsilon"]

    def test_len(self, catalog) -> None:
        assert len(catalog) == 5

    def test_records_are_frozen(self, catalog) -> None:
        with pytest.raises(ValidationError):
            catalog.records[0].bank = "Other"

    def test_records_tuple_is_immutable(self, catalog) -> None:
        assert isinstance(catalog.records, tuple)

    def test_camel_case_keys(self) -> None:
        record = OfferRecord.model_validate({
            "bank": "A", "product": "P", "type": "auto", "termMinMonths": 12, "rateMax": 0.2,
        })
        assert record.term_min_months == 12
        assert record.rate_max == 0.2
        assert record.amount_min is None

    def test_missing_required_key(self) -> None:
        with pytest.raises(ValidationError):
            OfferCatalog.from_dicts([{"bank": "A", "type": "cash"}])


class TestLoadCatalog:
    def test_loads_json_file(self, tmp_path) -> None:
        path = tmp_path / "offers.json"
        path.write_text(
            json.dumps([{"bank": "Банк", "product": "Кредит", "type": "cash", "rateMin": 0.2}], ensure_ascii=False),
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert len(catalog) == 1
        assert next(iter(catalog)).bank == "Банк"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "absent.json")

    def test_not_json(self, tmp_path) -> None:
        path = tmp_path / "offers.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid offer catalog"):
            load_catalog(path)

    def test_not_a_list(self, tmp_path) -> None:
        path = tmp_path / "offers.json"
        path.write_text('{"bank": "A"}', encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_shipped_catalog_is_valid(self) -> None:
        catalog = load_catalog(SHIPPED_CATALOG)
        assert len(catalog) > 0
        assert {r.type for r in catalog} == {"cash", "auto", "mortgage", "refinance"}
