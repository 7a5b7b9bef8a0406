# src/models/query.py

"""Request-scoped query models: the raw search and its interpretation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchQuery:
    """A free-text product search for one target country."""

    query: str
    country: str


@dataclass(frozen=True)
class ProductInfo:
    """Structured matching criteria derived from a SearchQuery.

    ``keywords`` and ``specifications`` keep first-seen order with
    duplicates removed, so matched parameters come out deterministic.
    """

    product_type: str = "general"
    brand: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)
    specifications: tuple[str, ...] = field(default_factory=tuple)
    currency: str = "USD"
