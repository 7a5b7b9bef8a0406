# src/models/source.py

"""Source addressing: which site to hit and which extractor reads it."""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote_plus


class SourceKind(Enum):
    """Markup family of a source; selects the extractor."""

    AMAZON = "amazon"
    EBAY = "ebay"
    FLIPKART = "flipkart"
    WALMART = "walmart"
    SNAPDEAL = "snapdeal"


# Kinds with a dedicated extractor in src.scrapers.registry
SUPPORTED_KINDS: frozenset[SourceKind] = frozenset(
    {SourceKind.AMAZON, SourceKind.EBAY, SourceKind.FLIPKART}
)


@dataclass(frozen=True)
class SourceDefinition:
    """A single e-commerce site in the source catalog."""

    name: str
    base_url: str
    search_path: str
    kind: SourceKind

    @property
    def supported(self) -> bool:
        return self.kind in SUPPORTED_KINDS

    def search_url(self, query: str) -> str:
        """Build the listing-page URL for *query*."""
        return f"{self.base_url}{self.search_path}{quote_plus(query)}"
