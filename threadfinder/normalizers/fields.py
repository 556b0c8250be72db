# threadfinder/normalizers/fields.py

"""Field-level normalisers for raw scraped values.

Every function here is total: malformed input yields ``None`` (or the
title sentinel) instead of raising, so adapters can feed them whatever
the upstream page happened to contain.
"""

import re
import urllib.parse

from threadfinder.config.settings import Settings

UNKNOWN_TITLE = "Unknown Product"
UNKNOWN_PRICE = "See price"
MISSING_LINK = "#"

_PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="500" '
    'fill="#f5f5f5"><rect width="400" height="500"/>'
    '<text x="200" y="240" text-anchor="middle" fill="#9ca3af" '
    'font-family="sans-serif" font-size="16">No image</text></svg>'
)
PLACEHOLDER_IMAGE = "data:image/svg+xml," + urllib.parse.quote(
    _PLACEHOLDER_SVG, safe="-_.!~*'()"
)

_RANGE_SEPARATOR = " - "
_FROM_RE = re.compile(r"^from\s*", re.IGNORECASE)
_CURRENCY_CODE_RE = re.compile(r"usd|us\$|aud|gbp|eur|cad", re.IGNORECASE)
_PRICE_RE = re.compile(r"-?\s*[$£€]?\s*-?\s*[\d,]+\.?\d*")
_CURRENCY_SYMBOLS = ("$", "£", "€")

_WHITESPACE_RE = re.compile(r"\s+")
# Repeated so that "Sale: New: Midi Dress" strips fully in one pass
_PROMO_PREFIX_RE = re.compile(
    r"^(?:(?:new|sale|hot|best seller)\s*[:\-]+\s*)+",
    re.IGNORECASE,
)

_IMAGE_REJECT_RE = re.compile(
    r"placeholder|blank\.gif|1x1|spacer", re.IGNORECASE
)


def normalize_price(raw: object) -> str | None:
    """Normalise a price string like ``'From USD 1,299.00 - 1,499.00'``.

    Ranges collapse to the lower bound, and every result is rendered
    with a leading currency symbol (``$`` when the source had none).

    Returns:
        The display price (e.g. ``"$1299.00"``), or ``None`` when no
        plausible price in ``(0, 50000)`` can be found.
    """
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None

    if _RANGE_SEPARATOR in cleaned:
        cleaned = cleaned.split(_RANGE_SEPARATOR)[0].strip()
    cleaned = _FROM_RE.sub("", cleaned)
    cleaned = _CURRENCY_CODE_RE.sub("", cleaned).strip()

    match = _PRICE_RE.search(cleaned)
    if not match or "-" in match.group(0):
        return None

    price = _WHITESPACE_RE.sub("", match.group(0)).replace(",", "")
    price = price.rstrip(".")
    if not price.startswith(_CURRENCY_SYMBOLS):
        price = "$" + price

    try:
        value = float(re.sub(r"[^0-9.]", "", price))
    except ValueError:
        return None
    if Settings.MIN_PRICE < value < Settings.MAX_PRICE:
        return price
    return None


def format_amount(value: float) -> str:
    """Render a numeric price without a currency: ``55.0`` -> ``"55"``.

    Fractional amounts keep two decimals; ``nan`` and ``inf`` come out
    as text that :func:`normalize_price` rejects.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"


def normalize_title(
    raw: object, max_length: int = Settings.MAX_TITLE_LENGTH,
) -> str:
    """Collapse whitespace, drop promo prefixes and truncate a title."""
    if not isinstance(raw, str):
        return UNKNOWN_TITLE
    cleaned = _WHITESPACE_RE.sub(" ", raw).strip()
    cleaned = _PROMO_PREFIX_RE.sub("", cleaned).strip()
    if not cleaned:
        return UNKNOWN_TITLE
    if len(cleaned) > max_length:
        return cleaned[: max_length - 3].rstrip() + "..."
    return cleaned


def normalize_image_url(raw: object) -> str | None:
    """Return an absolute image URL, or ``None`` if it is unusable.

    Protocol-relative URLs are upgraded to ``https:``; data URIs,
    tracking pixels and spacer images are rejected.
    """
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    if cleaned.startswith("//"):
        cleaned = "https:" + cleaned
    if cleaned.lower().startswith("data:"):
        return None
    if _IMAGE_REJECT_RE.search(cleaned):
        return None

    try:
        parsed = urllib.parse.urlparse(cleaned)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return cleaned
