# threadfinder/scrapers/suggest_scraper.py

"""Adapter for storefronts exposing a ``/search/suggest.json`` endpoint."""

import re
import urllib.parse
from typing import Any

from threadfinder.models.product import CandidateRecord
from threadfinder.normalizers.fields import UNKNOWN_PRICE
from threadfinder.scrapers.base_scraper import BaseScraper
from threadfinder.scrapers.field_paths import first_value, get_path

# ``dress_200x300.jpg?v=1`` -> ``dress_600x.jpg?v=1``
_IMAGE_SIZE_RE = re.compile(r"(_\d+x\d+)?\.(jpg|png|webp)(\?.*)?$")

_IMAGE_FIELDS = ("image", "featured_image.url", "featured_image")
_PRICE_FIELDS = ("price", "price_min")


class SuggestScraper(BaseScraper):
    """Tier 1 adapter shared by every hosted-storefront store.

    These storefronts all serve the same predictive-search JSON, so one
    class covers them; the store's domain comes from its config.
    """

    SUGGEST_PATH = (
        "/search/suggest.json?q={query}"
        "&resources[type]=product"
        "&resources[limit]={limit}"
        "&resources[options][unavailable_products]=hide"
    )

    @staticmethod
    def upsize_image(url: str) -> str:
        """Request the 600px rendition of a storefront CDN image."""
        if not url:
            return ""
        if not url.startswith("http"):
            url = "https:" + url
        return _IMAGE_SIZE_RE.sub(
            lambda m: f"_600x.{m.group(2)}{m.group(3) or ''}", url
        )

    @staticmethod
    def format_price(raw: Any) -> str:
        """Render ``price`` as dollars, detecting integer-cents values.

        ``150`` is taken as cents (``$1.50``) while ``"150.00"`` is
        already dollars (``$150.00``).
        """
        if raw is None or isinstance(raw, bool):
            return UNKNOWN_PRICE
        raw_str = str(raw).strip()
        try:
            value = float(raw_str)
        except ValueError:
            return UNKNOWN_PRICE
        if not value > 0:
            return UNKNOWN_PRICE
        is_cents = (
            value.is_integer() and value > 100 and "." not in raw_str
        )
        dollars = value / 100 if is_cents else value
        return f"${dollars:.2f}"

    def _parse_item(self, item: dict[str, Any]) -> CandidateRecord:
        image = first_value(item, _IMAGE_FIELDS)
        path = item.get("url")
        return CandidateRecord(
            title=item.get("title"),
            price=self.format_price(first_value(item, _PRICE_FIELDS)),
            image=self.upsize_image(image if isinstance(image, str) else ""),
            link=(
                f"{self.store.base_url}{path}"
                if isinstance(path, str) and path.strip()
                else None
            ),
        )

    async def _collect(self, query: str) -> list[CandidateRecord]:
        url = self.store.base_url + self.SUGGEST_PATH.format(
            query=urllib.parse.quote(query, safe=""),
            limit=self.settings.MAX_RESULTS,
        )
        data = await self._fetch_json(url)
        items = get_path(data, "resources.results.products")
        if not isinstance(items, list):
            return []
        return [
            self._parse_item(item)
            for item in items[: self.settings.MAX_RESULTS]
            if isinstance(item, dict)
        ]
