# src/scrapers/registry.py

"""Maps each SourceKind to its extractor."""

from src.models.source import SourceKind
from src.scrapers.amazon_extractor import AmazonExtractor
from src.scrapers.base_extractor import BaseExtractor
from src.scrapers.ebay_extractor import EbayExtractor
from src.scrapers.flipkart_extractor import FlipkartExtractor

EXTRACTORS: dict[SourceKind, type[BaseExtractor]] = {
    SourceKind.AMAZON: AmazonExtractor,
    SourceKind.EBAY: EbayExtractor,
    SourceKind.FLIPKART: FlipkartExtractor,
}

_instances: dict[SourceKind, BaseExtractor] = {}


class UnsupportedSourceError(LookupError):
    """Raised for a SourceKind that has no extractor."""


def get_extractor(kind: SourceKind) -> BaseExtractor:
    """Return the shared extractor instance for *kind*.

    Extractors hold only their selectors, so one instance per kind is
    reused across requests.

    Raises:
        UnsupportedSourceError: *kind* has no extractor (Walmart, Snapdeal).
    """
    if kind not in EXTRACTORS:
        raise UnsupportedSourceError(f"No extractor for {kind.value}")
    if kind not in _instances:
        _instances[kind] = EXTRACTORS[kind]()
    return _instances[kind]
