# threadfinder/scrapers/nordstrom_scraper.py

"""Scraper for nordstrom.com via the page's ``__NEXT_DATA__`` payload."""

import json
import urllib.parse
from typing import Any

from bs4 import BeautifulSoup

from threadfinder.models.product import CandidateRecord
from threadfinder.scrapers.base_scraper import BaseScraper
from threadfinder.scrapers.field_paths import (
    FieldMap,
    any_of,
    get_path,
    joined,
    prefixed,
)

BASE_URL = "https://www.nordstrom.com"

FIELDS = FieldMap(
    title=(joined("brandName", any_of("productName", "name")),),
    price=(
        "currentPriceString",
        "priceString",
        any_of("currentPrice", "price"),
    ),
    image=("imageUrl", "mediaUrl", "images.0.url"),
    link=(
        prefixed(BASE_URL, "productPageUrl"),
        prefixed(f"{BASE_URL}/s/", "id"),
    ),
)

# Where the result list lives inside the Next.js page props
_RESULT_PATHS = (
    "props.pageProps.searchResults.productsById",
    "props.pageProps.products",
)


class NordstromScraper(BaseScraper):
    """Scraper for Nordstrom women's search results.

    Nordstrom is a Next.js app; the search page embeds its full product
    map as JSON in ``script#__NEXT_DATA__`` (or a generic
    ``application/json`` script on some variants).
    """

    SEARCH_URL = (
        "https://www.nordstrom.com/sr?origin=keywordsearch"
        "&keyword={query}&filterByGender=Women"
    )
    SCRIPT_SELECTOR = (
        'script#__NEXT_DATA__, script[type="application/json"]'
    )

    @staticmethod
    def _extract_items(
        soup: BeautifulSoup,
    ) -> list[dict[str, Any]]:
        """Collect product dicts from every JSON script on the page."""
        items: list[dict[str, Any]] = []
        for script in soup.select(NordstromScraper.SCRIPT_SELECTOR):
            try:
                data = json.loads(script.string or "")
            except (json.JSONDecodeError, TypeError):
                continue
            for path in _RESULT_PATHS:
                found = get_path(data, path)
                if isinstance(found, dict):
                    found = list(found.values())
                if isinstance(found, list) and found:
                    items.extend(
                        i for i in found if isinstance(i, dict)
                    )
                    break
        return items

    async def _collect(self, query: str) -> list[CandidateRecord]:
        url = self.SEARCH_URL.format(
            query=urllib.parse.quote(query, safe="")
        )
        soup = await self._fetch_html(url)

        records: list[CandidateRecord] = []
        for item in self._extract_items(soup)[: self.settings.MAX_RESULTS]:
            product = item.get("product")
            records.append(
                FIELDS.extract(product if isinstance(product, dict) else item)
            )
        return records
