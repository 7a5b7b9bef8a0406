# src/filters/offer_validator.py

"""Offer validation — drop unpriced or unnamed offers before ranking."""

import logging

from src.filters.price_parser import extract_numeric_price
from src.models.offer import OfferCandidate, RankedResult

logger = logging.getLogger("price_aggregator.filters")


class OfferValidator:
    """Parse offer prices and drop offers that cannot be ranked."""

    @staticmethod
    def validate(
        offers: list[OfferCandidate],
    ) -> tuple[list[RankedResult], int]:
        """Drop offers with blank names or a parsed price of zero.

        Price text such as ``"Free"`` or ``"See price in cart"`` parses
        to 0 and is dropped here.

        Returns the priced results and the count of dropped items.
        """
        valid: list[RankedResult] = []
        dropped = 0

        for offer in offers:
            if not offer.product_name.strip():
                logger.debug(
                    "Dropped offer with empty name (source=%s, link=%s)",
                    offer.source,
                    offer.link,
                )
                dropped += 1
                continue
            price = extract_numeric_price(offer.price_text)
            if price <= 0:
                logger.debug(
                    "Dropped unpriced offer (price_text=%r, name=%s, "
                    "source=%s)",
                    offer.price_text,
                    offer.product_name,
                    offer.source,
                )
                dropped += 1
                continue
            valid.append(RankedResult.from_candidate(offer, price))

        if dropped:
            logger.info("Validation dropped %d offers", dropped)

        return valid, dropped
