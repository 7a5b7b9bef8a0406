# src/services/query_interpreter.py

"""Turn a free-text query into structured product-matching criteria.

The Gemini model is asked first; whenever it is unavailable or answers
with something that is not a JSON object, a deterministic rule-based
interpretation is used instead.  ``QueryInterpreter.interpret`` never
raises.
"""

import json
import logging
import re
from typing import Any

from src.config.sources import SUPPORTED_CURRENCIES, currency_for
from src.models.query import ProductInfo
from src.services.gemini_client import GeminiClient, GeminiError

logger = logging.getLogger("price_aggregator.interpreter")

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_MIN_KEYWORD_LENGTH = 3

# Scanned in order; matched text is kept as the user typed it
SPEC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d+\s?GB", re.IGNORECASE),
    re.compile(r"\d+\s?TB", re.IGNORECASE),
    re.compile(r"\bPro\b", re.IGNORECASE),
    re.compile(r"\bMax\b", re.IGNORECASE),
    re.compile(r"\bPlus\b", re.IGNORECASE),
    re.compile(r"\bMini\b", re.IGNORECASE),
    re.compile(r"\bAir\b", re.IGNORECASE),
    re.compile(r"\d+\s?inch", re.IGNORECASE),
    re.compile(r'\d+"'),
)

# First group with a term found in the lower-cased query wins
PRODUCT_TYPES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("smartphone", ("iphone", "phone", "mobile")),
    ("laptop", ("laptop", "macbook")),
    ("headphones", ("headphone", "earphone", "airdopes")),
)

KNOWN_BRANDS: tuple[str, ...] = (
    "Apple",
    "Samsung",
    "Google",
    "OnePlus",
    "iPhone",
    "boAt",
    "Sony",
    "Nike",
    "Adidas",
)

_PROMPT_TEMPLATE = (
    'Extract product info from: "{query}" for {country}. '
    "Return only JSON: "
    '{{"productType":"category","brand":"brand",'
    '"keywords":["key","words"],"specifications":["specs"],'
    '"currency":"{currency}"}}'
)


def _unique(items: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def extract_keywords(query: str) -> tuple[str, ...]:
    """Lower-cased query tokens longer than two characters."""
    tokens = _TOKEN_SPLIT_RE.split(query)
    return _unique(
        [t.lower() for t in tokens if len(t) >= _MIN_KEYWORD_LENGTH]
    )


def extract_specifications(query: str) -> tuple[str, ...]:
    """Spec-like tokens (storage sizes, screen sizes, model tiers)."""
    found: list[str] = []
    for pattern in SPEC_PATTERNS:
        found.extend(pattern.findall(query))
    return _unique(found)


def classify_product_type(query: str) -> str:
    lowered = query.lower()
    for product_type, terms in PRODUCT_TYPES:
        if any(term in lowered for term in terms):
            return product_type
    return "general"


def extract_brand(query: str) -> str:
    lowered = query.lower()
    for brand in KNOWN_BRANDS:
        if brand.lower() in lowered:
            return brand
    return ""


def build_fallback_info(query: str, country: str) -> ProductInfo:
    """Rule-based interpretation used when the model is unavailable."""
    return ProductInfo(
        product_type=classify_product_type(query),
        brand=extract_brand(query),
        keywords=extract_keywords(query),
        specifications=extract_specifications(query),
        currency=currency_for(country),
    )


def strip_code_fences(text: str) -> str:
    """Remove Markdown ``` / ```json fence markers from model output."""
    return _CODE_FENCE_RE.sub("", text).strip()


def _as_str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [
        item.strip()
        for item in value
        if isinstance(item, str) and item.strip()
    ]


def _as_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def parse_model_output(
    text: str, query: str, country: str,
) -> ProductInfo:
    """Coerce the model's JSON answer into a ProductInfo.

    Raises:
        ValueError: the text is not a JSON object.
    """
    data = json.loads(strip_code_fences(text))
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    keywords = _unique(
        [k.lower() for k in _as_str_list(data.get("keywords"))]
    )
    if not keywords:
        # An empty keyword set would filter out every offer
        keywords = extract_keywords(query)

    currency = _as_str(data.get("currency"), "").upper()
    if currency not in SUPPORTED_CURRENCIES:
        currency = currency_for(country)

    return ProductInfo(
        product_type=_as_str(data.get("productType"), "general"),
        brand=_as_str(data.get("brand"), ""),
        keywords=keywords,
        specifications=_unique(
            _as_str_list(data.get("specifications"))
        ),
        currency=currency,
    )


class QueryInterpreter:
    """Interprets queries, preferring Gemini over the rule-based path.

    Build one per process and share it across requests.
    """

    def __init__(self, client: GeminiClient | None = None) -> None:
        self.client = client or GeminiClient()
        logger.info(
            "Query interpreter ready (model=%s, api key %s)",
            self.client.model,
            "present" if self.client.configured else "missing",
        )

    def build_prompt(self, query: str, country: str) -> str:
        return _PROMPT_TEMPLATE.format(
            query=query,
            country=country,
            currency=currency_for(country),
        )

    async def interpret(self, query: str, country: str) -> ProductInfo:
        """Return matching criteria for *query*; never raises."""
        if not self.client.configured:
            info = build_fallback_info(query, country)
            logger.info("No Gemini key, using fallback: %s", info)
            return info

        try:
            text = await self.client.generate(
                self.build_prompt(query, country)
            )
            info = parse_model_output(text, query, country)
        except (GeminiError, ValueError) as exc:
            logger.warning(
                "Gemini interpretation failed, using fallback: %s", exc
            )
        except Exception as exc:
            logger.error(
                "Unexpected interpretation error, using fallback: %s",
                exc,
                exc_info=True,
            )
        else:
            logger.info("Gemini interpretation: %s", info)
            return info

        info = build_fallback_info(query, country)
        logger.info("Fallback interpretation: %s", info)
        return info
