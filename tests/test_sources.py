# tests/test_sources.py

"""Tests for the source catalog and currency table."""

import unittest

from src.config.sources import (
    SOURCE_CATALOG,
    SUPPORTED_COUNTRIES,
    currency_for,
    sources_for,
)
from src.models.source import SourceKind


class TestSourcesFor(unittest.TestCase):
    """sources_for lookup behaviour."""

    def test_case_insensitive(self) -> None:
        self.assertEqual(sources_for("uk"), sources_for("UK"))
        self.assertEqual(sources_for(" In "), sources_for("IN"))

    def test_unknown_country_falls_back_to_us(self) -> None:
        us = sources_for("US")
        for country in ("FR", "", "zz-top", None):
            with self.subTest(country=country):
                self.assertEqual(sources_for(country), us)

    def test_every_country_has_sources(self) -> None:
        for country in SUPPORTED_COUNTRIES:
            with self.subTest(country=country):
                self.assertTrue(sources_for(country))

    def test_catalog_order(self) -> None:
        names = [s.name for s in sources_for("IN")]
        self.assertEqual(names, ["Amazon India", "Flipkart", "Snapdeal"])

    def test_returns_a_copy(self) -> None:
        sources = sources_for("CA")
        sources.clear()
        self.assertEqual(len(SOURCE_CATALOG["CA"]), 2)

    def test_unsupported_sources_flagged(self) -> None:
        flags = {s.name: s.supported for s in sources_for("US")}
        self.assertEqual(
            flags, {"Amazon": True, "eBay": True, "Walmart": False}
        )

    def test_regional_ebay_uses_ebay_kind(self) -> None:
        kinds = {s.name: s.kind for s in sources_for("CA")}
        self.assertEqual(kinds["eBay Canada"], SourceKind.EBAY)


class TestSearchUrl(unittest.TestCase):
    """SourceDefinition.search_url behaviour."""

    def test_query_is_url_encoded(self) -> None:
        amazon = sources_for("US")[0]
        self.assertEqual(
            amazon.search_url("iPhone 15 Pro & case"),
            "https://www.amazon.com/s?k=iPhone+15+Pro+%26+case",
        )


class TestCurrencyFor(unittest.TestCase):
    """currency_for behaviour."""

    def test_known_countries(self) -> None:
        self.assertEqual(currency_for("US"), "USD")
        self.assertEqual(currency_for("in"), "INR")
        self.assertEqual(currency_for("UK"), "GBP")
        self.assertEqual(currency_for("ca"), "CAD")

    def test_unknown_defaults_to_usd(self) -> None:
        self.assertEqual(currency_for("JP"), "USD")
        self.assertEqual(currency_for(None), "USD")


if __name__ == "__main__":
    unittest.main()
