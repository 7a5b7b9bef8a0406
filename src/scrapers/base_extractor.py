# src/scrapers/base_extractor.py

"""Abstract base class for per-source listing extractors."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from src.config.settings import Settings
from src.models.offer import OfferCandidate
from src.models.query import ProductInfo


class BaseExtractor(ABC):
    """Turn a source's search-results markup into OfferCandidates.

    Subclasses only know where name, price and link live in one site's
    markup; skipping incomplete listings and tagging currency, source
    and matched parameters happens here.
    """

    # Listing names that are site furniture rather than products
    PLACEHOLDER_NAMES: tuple[str, ...] = ()

    def __init__(self, selector_key: str) -> None:
        self.selector_key = selector_key
        self.logger = logging.getLogger(
            f"price_aggregator.{selector_key}"
        )
        self.settings = Settings()
        self.selectors: dict[str, str] = self._load_selectors()

    def _load_selectors(self) -> dict[str, str]:
        """Load CSS selectors for this source from selectors.json."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, str] = all_selectors.get(self.selector_key, {})
        return result

    @staticmethod
    def text_of(card: Tag, selector: str, separator: str = " ") -> str:
        """Stripped text of the first non-empty match of *selector*."""
        for el in card.select(selector):
            text = el.get_text(separator, strip=True)
            if text:
                return text
        return ""

    @staticmethod
    def resolve_link(href: str | None, base_url: str) -> str:
        """Absolute URL for *href*, joined onto *base_url* if relative."""
        if not href or not href.strip():
            return ""
        href = href.strip()
        if urlparse(href).scheme in ("http", "https"):
            return href
        return urljoin(base_url, href)

    @staticmethod
    def match_parameters(
        product_name: str, specifications: tuple[str, ...],
    ) -> list[str]:
        """Specifications that appear in *product_name*, in order."""
        upper = product_name.upper()
        return [spec for spec in specifications if spec.upper() in upper]

    def is_placeholder(self, product_name: str) -> bool:
        return any(p in product_name for p in self.PLACEHOLDER_NAMES)

    def extract(
        self,
        markup: str,
        base_url: str,
        product_info: ProductInfo,
        source_name: str = "",
    ) -> list[OfferCandidate]:
        """Parse every listing card in *markup*.

        Cards missing a name, price or link, and placeholder entries,
        are skipped.
        """
        soup = BeautifulSoup(markup, "lxml")
        cards = soup.select(self.selectors["product_card"])
        source = source_name or self.selector_key

        offers: list[OfferCandidate] = []
        skipped = 0
        for card in cards:
            name, price_text, href = self.parse_card(card)
            link = self.resolve_link(href, base_url)
            if not (name and price_text and link):
                skipped += 1
                continue
            if self.is_placeholder(name):
                skipped += 1
                continue
            offers.append(
                OfferCandidate(
                    product_name=name,
                    price_text=price_text,
                    currency=product_info.currency,
                    link=link,
                    matched_parameters=self.match_parameters(
                        name, product_info.specifications
                    ),
                    source=source,
                )
            )

        self.logger.info(
            "[%s] %d listings parsed, %d kept, %d skipped",
            source,
            len(cards),
            len(offers),
            skipped,
        )
        return offers

    @abstractmethod
    def parse_card(
        self, card: Tag,
    ) -> tuple[str, str, str | None]:
        """Return ``(name, price_text, href)`` for one listing card."""
        ...
