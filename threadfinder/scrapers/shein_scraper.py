# threadfinder/scrapers/shein_scraper.py

"""Scraper for us.shein.com via goods arrays embedded in page scripts."""

import urllib.parse
from typing import Any

from threadfinder.models.product import CandidateRecord
from threadfinder.scrapers.base_scraper import BaseScraper
from threadfinder.scrapers.embedded_json import (
    extract_object_arrays,
    parse_json_array,
)
from threadfinder.scrapers.field_paths import FieldMap

BASE_URL = "https://us.shein.com"


def _product_link(item: dict[str, Any]) -> str | None:
    goods_id = item.get("goods_id") or item.get("goods_sn")
    if not goods_id:
        return None
    slug = item.get("goods_url_name")
    if slug:
        return f"{BASE_URL}/{slug}-p-{goods_id}.html"
    return f"{BASE_URL}/p-{goods_id}.html"


FIELDS = FieldMap(
    title=("goods_name", "title", "name"),
    price=(
        "salePrice.amount",
        "sale_price",
        "retail_price",
    ),
    image=("goods_img", "image"),
    link=(_product_link,),
)


class SheinScraper(BaseScraper):
    """Scraper for SHEIN US search results.

    SHEIN's search page carries goods lists in inline script state.
    Rather than parse the whole state blob, flat ``[{...}]`` arrays
    mentioning ``goods_id`` (or ``goods_sn`` on older templates) are cut
    out and decoded individually.
    """

    SEARCH_URL = "https://us.shein.com/pdsearch/{query}/"
    SCRIPT_MARKERS = ("productListData", "goods_id")
    ARRAY_KEYS = ("goods_id", "goods_sn")

    def _arrays_in(self, text: str) -> list[str]:
        for key in self.ARRAY_KEYS:
            arrays = extract_object_arrays(text, key)
            if arrays:
                return arrays
        return []

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
            for raw in self._arrays_in(text):
                for item in parse_json_array(raw):
                    if len(records) >= self.settings.MAX_RESULTS:
                        return records
                    records.append(FIELDS.extract(item))
        return records
