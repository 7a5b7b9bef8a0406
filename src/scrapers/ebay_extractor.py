# src/scrapers/ebay_extractor.py

"""Extractor for eBay search-result pages (.com, .co.uk, .ca)."""

from bs4 import Tag

from src.scrapers.base_extractor import BaseExtractor


class EbayExtractor(BaseExtractor):
    """Extractor for eBay search-result pages (.com, .co.uk, .ca)."""

    # eBay injects a promotional first card into every result list
    PLACEHOLDER_NAMES = ("Shop on eBay",)

    def __init__(self) -> None:
        super().__init__("ebay")

    def parse_card(self, card: Tag) -> tuple[str, str, str | None]:
        name = self.text_of(card, self.selectors["title"])

        # Ranges like "$20.00 to $35.00" keep only the low end;
        # eBay Canada prefixes prices with "C $"
        price_el = card.select_one(self.selectors["price"])
        price_text = price_el.get_text(" ", strip=True) if price_el else ""
        if price_text:
            price_text = price_text.split(" to ")[0].strip()

        url_el = card.select_one(self.selectors["url"])
        href = url_el.get("href") if url_el else None
        return name, price_text, str(href) if href else None
