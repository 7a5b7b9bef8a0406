# src/scrapers/flipkart_extractor.py

"""Extractor for flipkart.com search-result pages."""

from bs4 import Tag

from src.scrapers.base_extractor import BaseExtractor


class FlipkartExtractor(BaseExtractor):
    """Extractor for flipkart.com search-result pages."""

    def __init__(self) -> None:
        super().__init__("flipkart")

    def parse_card(self, card: Tag) -> tuple[str, str, str | None]:
        name = self.text_of(card, self.selectors["title"])
        price_text = self.text_of(card, self.selectors["price"])
        url_el = card.select_one(self.selectors["url"])
        href = url_el.get("href") if url_el else None
        return name, price_text, str(href) if href else None
