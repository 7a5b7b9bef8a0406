# src/filters/price_parser.py

"""Numeric price extraction from scraped price text."""

import math
import re

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def extract_numeric_price(text: str | None) -> float:
    """Parse a price string like ``'$1,299.99'`` into ``1299.99``.

    Every character except digits, ``.`` and ``-`` is dropped and the
    leading number of what remains is read, so ``'$20.00 - $35.00'``
    gives ``20.0``.  Text without a number, and negative values, give
    ``0.0``; the result is always finite.
    """
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC_RE.sub("", text)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value
