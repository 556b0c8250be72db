# threadfinder/normalizers/product_formatter.py

"""Turn raw candidate records into validated Products."""

import logging
import time
import uuid
from collections.abc import Iterable

from threadfinder.models.product import CandidateRecord, Product
from threadfinder.normalizers.fields import (
    MISSING_LINK,
    PLACEHOLDER_IMAGE,
    UNKNOWN_PRICE,
    UNKNOWN_TITLE,
    format_amount,
    normalize_image_url,
    normalize_price,
    normalize_title,
)

logger = logging.getLogger("threadfinder.normalizers")


def generate_product_id() -> str:
    """Return a process-unique opaque id like ``prod_1718000000000_3f9a1c2b7``."""
    return f"prod_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _display_price(raw: object) -> str:
    """Normalised price, else the raw upstream string, else the sentinel.

    Numbers never fall back to their raw form: ``0`` or ``99999`` show
    as 'See price'.
    """
    if isinstance(raw, bool):
        return UNKNOWN_PRICE
    if isinstance(raw, (int, float)):
        return normalize_price(format_amount(raw)) or UNKNOWN_PRICE
    normalized = normalize_price(raw)
    if normalized:
        return normalized
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return UNKNOWN_PRICE


def format_product(
    record: CandidateRecord,
    store_name: str,
    store_id: str,
) -> Product | None:
    """Normalise a single candidate record into a Product.

    Returns ``None`` when the record has neither a title nor a link,
    since there is nothing useful to show for it.
    """
    if not record.title and not record.link:
        return None

    link = record.link.strip() if isinstance(record.link, str) else ""
    return Product(
        id=generate_product_id(),
        store=store_id,
        store_name=store_name,
        title=normalize_title(record.title),
        price=_display_price(record.price),
        image=normalize_image_url(record.image) or PLACEHOLDER_IMAGE,
        link=link or MISSING_LINK,
    )


def filter_valid_products(
    products: Iterable[Product | None],
) -> list[Product]:
    """Drop missing products and those with a sentinel title or link."""
    valid: list[Product] = []
    dropped = 0

    for product in products:
        if product is None:
            dropped += 1
            continue
        if product.title == UNKNOWN_TITLE or product.link == MISSING_LINK:
            logger.debug(
                "Dropped weak product (store=%s, title=%s, link=%s)",
                product.store,
                product.title,
                product.link,
            )
            dropped += 1
            continue
        valid.append(product)

    if dropped:
        logger.debug("Validation dropped %d products", dropped)

    return valid
