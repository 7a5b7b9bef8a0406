# src/config/sources.py

"""Static per-country source catalog and currency table."""

from src.models.source import SourceDefinition, SourceKind

DEFAULT_COUNTRY = "US"
DEFAULT_CURRENCY = "USD"

CURRENCY_BY_COUNTRY: dict[str, str] = {
    "US": "USD",
    "IN": "INR",
    "UK": "GBP",
    "CA": "CAD",
}

SUPPORTED_CURRENCIES: frozenset[str] = frozenset(
    CURRENCY_BY_COUNTRY.values()
)

_AMAZON_SEARCH = "/s?k="
_EBAY_SEARCH = "/sch/i.html?_nkw="

SOURCE_CATALOG: dict[str, tuple[SourceDefinition, ...]] = {
    "US": (
        SourceDefinition(
            "Amazon", "https://www.amazon.com",
            _AMAZON_SEARCH, SourceKind.AMAZON,
        ),
        SourceDefinition(
            "eBay", "https://www.ebay.com",
            _EBAY_SEARCH, SourceKind.EBAY,
        ),
        SourceDefinition(
            "Walmart", "https://www.walmart.com",
            "/search?q=", SourceKind.WALMART,
        ),
    ),
    "IN": (
        SourceDefinition(
            "Amazon India", "https://www.amazon.in",
            _AMAZON_SEARCH, SourceKind.AMAZON,
        ),
        SourceDefinition(
            "Flipkart", "https://www.flipkart.com",
            "/search?q=", SourceKind.FLIPKART,
        ),
        SourceDefinition(
            "Snapdeal", "https://www.snapdeal.com",
            "/search?keyword=", SourceKind.SNAPDEAL,
        ),
    ),
    "UK": (
        SourceDefinition(
            "Amazon UK", "https://www.amazon.co.uk",
            _AMAZON_SEARCH, SourceKind.AMAZON,
        ),
        SourceDefinition(
            "eBay UK", "https://www.ebay.co.uk",
            _EBAY_SEARCH, SourceKind.EBAY,
        ),
    ),
    "CA": (
        SourceDefinition(
            "Amazon Canada", "https://www.amazon.ca",
            _AMAZON_SEARCH, SourceKind.AMAZON,
        ),
        SourceDefinition(
            "eBay Canada", "https://www.ebay.ca",
            _EBAY_SEARCH, SourceKind.EBAY,
        ),
    ),
}

SUPPORTED_COUNTRIES: tuple[str, ...] = tuple(SOURCE_CATALOG)


def normalise_country(country: str | None) -> str:
    """Upper-case and trim a country code (``None`` becomes ``""``)."""
    return (country or "").strip().upper()


def sources_for(country: str | None) -> list[SourceDefinition]:
    """Return the ordered sources for *country*.

    Lookup is case-insensitive; unknown codes get the US list.
    """
    key = normalise_country(country)
    return list(
        SOURCE_CATALOG.get(key, SOURCE_CATALOG[DEFAULT_COUNTRY])
    )


def currency_for(country: str | None) -> str:
    """Map a country code to its currency, defaulting to USD."""
    return CURRENCY_BY_COUNTRY.get(
        normalise_country(country), DEFAULT_CURRENCY
    )
