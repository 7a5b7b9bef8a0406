# src/filters/deduplicator.py

"""Collapse offers that point at the same listing."""

import logging
import re

from src.models.offer import RankedResult

logger = logging.getLogger("price_aggregator.filters")


class OfferDeduplicator:
    """Remove listings that appear more than once in the merged set."""

    # Query strings are kept: Amazon ad redirects and Flipkart variants
    # differ only there
    _FRAGMENT_RE = re.compile(r"#.*$")

    @staticmethod
    def normalise_link(link: str) -> str:
        """Strip fragment and trailing slash; lower-case."""
        if not link:
            return ""
        cleaned = OfferDeduplicator._FRAGMENT_RE.sub("", link)
        return cleaned.rstrip("/").lower()

    @staticmethod
    def deduplicate(
        results: list[RankedResult],
    ) -> tuple[list[RankedResult], int]:
        """Keep one offer per normalised link.

        The first occurrence keeps its position; if a later duplicate
        is cheaper its data replaces the first one in place.

        Returns the unique offers and the count of removed duplicates.
        """
        seen: dict[str, int] = {}
        kept: list[RankedResult] = []
        removed = 0

        for result in results:
            key = OfferDeduplicator.normalise_link(result.link)
            if key and key in seen:
                idx = seen[key]
                if result.price < kept[idx].price:
                    kept[idx] = result
                removed += 1
                continue
            if key:
                seen[key] = len(kept)
            kept.append(result)

        if removed:
            logger.info("Deduplication removed %d duplicate offers", removed)

        return kept, removed
