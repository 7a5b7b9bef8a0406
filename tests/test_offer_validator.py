# tests/test_offer_validator.py

"""Tests for OfferValidator."""

import unittest

from src.filters.offer_validator import OfferValidator
from src.models.offer import OfferCandidate, RankedResult


def _offer(name: str, price_text: str) -> OfferCandidate:
    return OfferCandidate(
        product_name=name,
        price_text=price_text,
        currency="USD",
        link=f"https://shop.test/{name.replace(' ', '-')}",
        matched_parameters=["Pro"],
        source="Shop",
    )


class TestValidate(unittest.TestCase):

    def test_priced_offers_become_ranked_results(self) -> None:
        valid, dropped = OfferValidator.validate(
            [_offer("Tablet Pro", "$1,299.99")]
        )
        self.assertEqual(dropped, 0)
        self.assertEqual(len(valid), 1)
        result = valid[0]
        self.assertIsInstance(result, RankedResult)
        self.assertEqual(result.price, 1299.99)
        self.assertEqual(result.price_text, "$1,299.99")
        self.assertEqual(result.matched_parameters, ["Pro"])
        self.assertEqual(result.source, "Shop")

    def test_unpriced_and_unnamed_offers_dropped(self) -> None:
        offers = [
            _offer("Free sample", "Free"),
            _offer("Bundle", "See price in cart"),
            _offer("Refund", "-$5.00"),
            _offer("   ", "$10.00"),
            _offer("Case", "$0.00"),
            _offer("Charger", "$19.99"),
        ]
        valid, dropped = OfferValidator.validate(offers)
        self.assertEqual(dropped, 5)
        self.assertEqual([v.product_name for v in valid], ["Charger"])

    def test_empty(self) -> None:
        self.assertEqual(OfferValidator.validate([]), ([], 0))


if __name__ == "__main__":
    unittest.main()
