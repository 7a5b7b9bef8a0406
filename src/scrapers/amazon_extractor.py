# src/scrapers/amazon_extractor.py

"""Extractor for Amazon search-result pages (all regional storefronts)."""

from bs4 import Tag

from src.scrapers.base_extractor import BaseExtractor


class AmazonExtractor(BaseExtractor):
    """Extractor for Amazon search-result pages (all regional storefronts)."""

    def __init__(self) -> None:
        super().__init__("amazon")

    def _compose_price(self, card: Tag) -> str:
        """Join symbol, whole and fraction parts, e.g. ``$999.99``."""
        whole = self.text_of(card, self.selectors["price_whole"], "")
        if not whole:
            return ""
        whole = whole.rstrip(".")
        fraction = self.text_of(
            card, self.selectors["price_fraction"], ""
        )
        symbol = self.text_of(card, self.selectors["price_symbol"], "")
        if fraction:
            return f"{symbol}{whole}.{fraction}"
        return f"{symbol}{whole}"

    def parse_card(self, card: Tag) -> tuple[str, str, str | None]:
        name = self.text_of(card, self.selectors["title"])
        url_el = card.select_one(self.selectors["url"]) or card.select_one(
            self.selectors["url_fallback"]
        )
        href = str(url_el["href"]) if url_el else None
        return name, self._compose_price(card), href
