# src/models/offer.py

"""Offer records flowing from extraction to the ranked response."""

from dataclasses import asdict, dataclass, field


@dataclass
class OfferCandidate:
    """One listing scraped from a source's search page."""

    product_name: str
    price_text: str
    currency: str
    link: str
    matched_parameters: list[str] = field(
        default_factory=lambda: list[str]()
    )
    source: str = ""


@dataclass
class RankedResult(OfferCandidate):
    """An OfferCandidate that passed filtering, with its parsed price."""

    price: float = 0.0

    @classmethod
    def from_candidate(
        cls, candidate: OfferCandidate, price: float,
    ) -> "RankedResult":
        return cls(**asdict(candidate), price=price)

    def to_response(self) -> dict[str, object]:
        """Serialise to the public ``/api/prices`` item shape."""
        return {
            "productName": self.product_name,
            "price": self.price_text,
            "currency": self.currency,
            "link": self.link,
            "parameters": list(self.matched_parameters),
            "source": self.source,
        }
