# threadfinder/scrapers/asos_scraper.py

"""Scraper for asos.com (US) using their product search API."""

import urllib.parse
from typing import Any

from threadfinder.models.product import CandidateRecord
from threadfinder.scrapers.base_scraper import BaseScraper
from threadfinder.scrapers.field_paths import (
    FieldMap,
    any_of,
    first_value,
    joined,
    prefixed,
)

BASE_URL = "https://www.asos.com"


def _image_url(item: dict[str, Any]) -> str | None:
    """ASOS image paths usually come without a scheme, sometimes with ``//``."""
    raw = first_value(item, ("imageUrl", "images.0.url"))
    if not isinstance(raw, str):
        return None
    if raw.startswith(("http://", "https://")):
        return raw
    return "https://" + raw.removeprefix("//")


FIELDS = FieldMap(
    title=("name", joined("brandName", "description")),
    price=(
        "price.current.text",
        "price.current.value",
    ),
    image=(_image_url,),
    link=(
        prefixed(f"{BASE_URL}/", any_of("url", prefixed("us/prd/", "id"))),
    ),
)


class AsosScraper(BaseScraper):
    """Scraper for asos.com via the JSON search API used by their web app."""

    SEARCH_API = (
        "https://www.asos.com/api/product/search/v2/categories/4209"
        "?q={query}&store=US&lang=en-US&currency=USD&rowlength=4"
        "&channel=mobile-web&country=US&limit={limit}&offset=0"
    )

    async def _collect(self, query: str) -> list[CandidateRecord]:
        url = self.SEARCH_API.format(
            query=urllib.parse.quote(query, safe=""),
            limit=self.settings.MAX_RESULTS,
        )
        data = await self._fetch_json(
            url,
            {"Referer": f"{BASE_URL}/", "Origin": BASE_URL},
        )
        items = data.get("products") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [
            FIELDS.extract(item)
            for item in items[: self.settings.MAX_RESULTS]
            if isinstance(item, dict)
        ]
