# threadfinder/scrapers/lulus_scraper.py

"""Scraper for lulus.com via server-rendered search result cards."""

import urllib.parse

from bs4 import BeautifulSoup, Tag

from threadfinder.models.product import CandidateRecord
from threadfinder.scrapers.base_scraper import BaseScraper

BASE_URL = "https://www.lulus.com"


class LulusScraper(BaseScraper):
    """Scraper for Lulus search results.

    Card markup changes often, so several container selectors are tried
    in order; the first one producing products wins.
    """

    SEARCH_URL = "https://www.lulus.com/search?q={query}"
    CARD_SELECTORS = (
        ".product-card",
        ".product-tile",
        '[class*="product-card"]',
        'a[href*="/product/"]',
    )
    LINK_SELECTOR = 'a[href*="/product/"]'
    TITLE_SELECTOR = ".product-name, .product-title, h3"
    PRICE_SELECTOR = '.price, [class*="price"]'

    @staticmethod
    def _attr(el: Tag | None, name: str) -> str:
        if el is None:
            return ""
        value = el.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return str(value).strip() if value else ""

    def _parse_card(self, card: Tag) -> CandidateRecord | None:
        """Parse one result card; ``None`` if it lacks a title or link."""
        link = (
            self._attr(card.select_one(self.LINK_SELECTOR), "href")
            or self._attr(card, "href")
        )
        if link and not link.startswith("http"):
            link = urllib.parse.urljoin(BASE_URL, link)

        title_el = card.select_one(self.TITLE_SELECTOR)
        title = title_el.get_text(strip=True) if title_el else ""
        if not title:
            title = (
                self._attr(card.select_one("a[title]"), "title")
                or self._attr(card, "title")
            )

        price_el = card.select_one(self.PRICE_SELECTOR)
        price = price_el.get_text(strip=True) if price_el else ""

        img_el = card.select_one("img")
        image = self._attr(img_el, "src") or self._attr(img_el, "data-src")
        if image.startswith("//"):
            image = "https:" + image

        if not title or not link:
            return None
        return CandidateRecord(
            title=title, price=price, image=image, link=link
        )

    def _parse_cards(self, soup: BeautifulSoup) -> list[CandidateRecord]:
        for selector in self.CARD_SELECTORS:
            cards = soup.select(selector)[: self.settings.MAX_RESULTS]
            records = [
                r for r in (self._parse_card(c) for c in cards) if r
            ]
            if records:
                self.logger.debug(
                    "[lulus] Selector '%s' matched %d cards",
                    selector,
                    len(records),
                )
                return records
        return []

    async def _collect(self, query: str) -> list[CandidateRecord]:
        url = self.SEARCH_URL.format(
            query=urllib.parse.quote(query, safe="")
        )
        soup = await self._fetch_html(url)
        return self._parse_cards(soup)
