# threadfinder/scrapers/base_scraper.py

"""Abstract base class for all store adapters."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Any

from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests

from threadfinder.config.settings import Settings
from threadfinder.core.exceptions import FetchError
from threadfinder.models.product import CandidateRecord, Product
from threadfinder.models.store import StoreConfig
from threadfinder.normalizers.product_formatter import (
    filter_valid_products,
    format_product,
)


class BaseScraper(ABC):
    """Abstract base class for all store adapters.

    Subclasses only implement :meth:`_collect`, which turns a query into
    raw :class:`CandidateRecord` objects.  :meth:`search` owns the HTTP
    session, normalisation, validity filtering and the result cap.

    Transport failures are logged and re-raised as :class:`FetchError`
    so the aggregator can report them per store.  Anything that goes
    wrong while *parsing* a response degrades to fewer (or no) results.
    """

    def __init__(self, store: StoreConfig) -> None:
        self.store = store
        self.logger = logging.getLogger(
            f"threadfinder.{store.id}"
        )
        self.settings = Settings()
        self.session: Any = None
        self._request_timeout: int = (
            self.settings.REQUEST_TIMEOUT
        )

    def _new_session(self) -> Any:
        """Create a browser-impersonating async session."""
        return curl_requests.AsyncSession(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def _build_headers(
        self,
        accept: str,
        extra: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Build request headers with a freshly rotated User-Agent."""
        return {
            "User-Agent": random.choice(self.settings.USER_AGENTS),
            "Accept": accept,
            "Accept-Language": self.settings.ACCEPT_LANGUAGE,
            **(extra or {}),
        }

    async def _request(
        self,
        url: str,
        headers: dict[str, str],
    ) -> Any:
        """GET a URL, rejecting transport errors and 5xx responses.

        3xx/4xx responses are returned so callers can inspect them.
        """
        try:
            resp = await self.session.get(
                url,
                headers=headers,
                timeout=self._request_timeout,
                allow_redirects=True,
                max_redirects=self.settings.MAX_REDIRECTS,
            )
        except Exception as exc:
            raise FetchError(self.store.id, str(exc)) from exc

        if resp.status_code >= 500:
            raise FetchError(
                self.store.id, f"HTTP {resp.status_code}"
            )
        return resp

    async def _fetch_json(
        self,
        url: str,
        extra_headers: dict[str, str] | None = None,
    ) -> Any:
        """Fetch and decode a JSON document; ``None`` if undecodable."""
        headers = self._build_headers(
            self.settings.JSON_ACCEPT, extra_headers
        )
        resp = await self._request(url, headers)
        if resp.status_code >= 400:
            raise FetchError(
                self.store.id, f"HTTP {resp.status_code}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            self.logger.warning(
                "[%s] Response was not valid JSON: %s",
                self.store.id,
                exc,
            )
            return None

    async def _fetch_html(
        self,
        url: str,
        extra_headers: dict[str, str] | None = None,
    ) -> BeautifulSoup:
        """Fetch a page and parse it with lxml."""
        headers = self._build_headers(
            self.settings.HTML_ACCEPT, extra_headers
        )
        resp = await self._request(url, headers)
        if resp.status_code >= 400:
            raise FetchError(
                self.store.id, f"HTTP {resp.status_code}"
            )
        return BeautifulSoup(resp.text, "lxml")

    def _to_products(
        self, records: list[CandidateRecord],
    ) -> list[Product]:
        """Format, validate and cap raw records."""
        products = filter_valid_products(
            format_product(r, self.store.name, self.store.id)
            for r in records
        )
        return products[: self.settings.MAX_RESULTS]

    async def search(self, query: str) -> list[Product]:
        """Search this store and return normalised Products."""
        self.session = self._new_session()
        try:
            records = await self._collect(query)
        except FetchError as exc:
            self.logger.warning(
                "[%s] Search failed: %s", self.store.id, exc
            )
            raise
        except Exception as exc:
            self.logger.error(
                "[%s] Could not parse search results: %s",
                self.store.id,
                exc,
                exc_info=True,
            )
            return []
        finally:
            await self.session.close()

        products = self._to_products(records)
        self.logger.info(
            "[%s] %d products for '%s' (%d candidates)",
            self.store.id,
            len(products),
            query,
            len(records),
        )
        return products

    @abstractmethod
    async def _collect(self, query: str) -> list[CandidateRecord]:
        """Query the store and return raw candidate records."""
        ...
