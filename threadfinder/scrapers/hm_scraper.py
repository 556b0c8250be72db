# threadfinder/scrapers/hm_scraper.py

"""Scraper for www2.hm.com (US) via product JSON embedded in the search page."""

import urllib.parse

from threadfinder.models.product import CandidateRecord
from threadfinder.scrapers.base_scraper import BaseScraper
from threadfinder.scrapers.embedded_json import (
    extract_embedded_array,
    parse_json_array,
)
from threadfinder.scrapers.field_paths import FieldMap, prefixed

BASE_URL = "https://www2.hm.com"

FIELDS = FieldMap(
    title=("title", "name"),
    price=(
        "price",
        "whitePrice.formattedValue",
        "redPrice.formattedValue",
    ),
    image=(
        "image",
        "images.0.src",
        "defaultArticle.images.0.src",
    ),
    link=(
        prefixed(BASE_URL, "swatchesLink"),
        prefixed(BASE_URL, "link"),
    ),
)


class HmScraper(BaseScraper):
    """Scraper for H&M US search results.

    The search page ships its result list inside an inline script as a
    ``"products": [...]`` property; the array is cut out of the script
    text and decoded on its own.
    """

    SEARCH_URL = "https://www2.hm.com/en_us/search-results.html?q={query}"
    SCRIPT_MARKERS = ("productArticleDetails", '"products"')
    ARRAY_KEY = "products"

    async def _collect(self, query: str) -> list[CandidateRecord]:
        url = self.SEARCH_URL.format(
            query=urllib.parse.quote(query, safe="")
        )
        soup = await self._fetch_html(url)

        records: list[CandidateRecord] = []
        for script in soup.find_all("script"):
            text = script.string or script.get_text() or ""
            if not any(m in text for m in self.SCRIPT_MARKERS):
                continue
            raw = extract_embedded_array(text, self.ARRAY_KEY)
            for item in parse_json_array(raw):
                if len(records) >= self.settings.MAX_RESULTS:
                    return records
                records.append(FIELDS.extract(item))
        return records
