# src/filters/relevance_filter.py

"""Keep only offers whose name mentions one of the query keywords."""

import logging
from typing import TypeVar

from src.models.offer import OfferCandidate

logger = logging.getLogger("price_aggregator.filters")

OfferT = TypeVar("OfferT", bound=OfferCandidate)


class RelevanceFilter:
    """Filter offers by the interpreter's keyword set."""

    @staticmethod
    def is_relevant(product_name: str, keywords: list[str]) -> bool:
        name_lower = product_name.lower()
        return any(kw in name_lower for kw in keywords)

    @staticmethod
    def filter_by_keywords(
        offers: list[OfferT],
        keywords: tuple[str, ...] | list[str],
    ) -> tuple[list[OfferT], int]:
        """Keep offers whose name contains at least one keyword.

        Matching is a case-insensitive substring test.  With no
        keywords nothing can match, so every offer is excluded.

        Returns the kept offers and the count of excluded ones.
        """
        lowered_keywords = [kw.lower() for kw in keywords if kw]

        kept: list[OfferT] = []
        excluded = 0
        for offer in offers:
            if RelevanceFilter.is_relevant(
                offer.product_name, lowered_keywords
            ):
                kept.append(offer)
            else:
                excluded += 1

        if excluded:
            logger.info(
                "Relevance filter excluded %d of %d offers",
                excluded,
                len(offers),
            )

        return kept, excluded
