# threadfinder/services/search_aggregator.py

"""Fans a query out to every selected store and assembles the response."""

import asyncio
import importlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from threadfinder.models.product import Product
from threadfinder.models.search import SearchResponse, StoreResult
from threadfinder.models.store import StoreConfig, StoreDirectory

logger = logging.getLogger("threadfinder.aggregator")

AdapterFactory = Callable[[StoreConfig], Any]


@dataclass
class StoreOutcome:
    """What one store's search produced: results or an error."""

    results: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    error: str | None = None


def _load_scraper_class(dotted_path: str) -> type[Any]:
    """Dynamically import a scraper class from its dotted module path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[Any] = getattr(module, class_name)
    return cls


def default_adapter_factory(store: StoreConfig) -> Any:
    """Instantiate the adapter class named in the store's config."""
    return _load_scraper_class(store.adapter)(store)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SearchAggregator:
    """Coordinates one search across many stores.

    Every store runs as its own task; the aggregator waits for all of
    them and never lets one store's failure touch another's result.
    It is the single place where adapter errors become the per-store
    ``error`` string.
    """

    def __init__(
        self,
        directory: StoreDirectory,
        adapter_factory: AdapterFactory | None = None,
    ) -> None:
        self.directory = directory
        self._adapter_factory = (
            adapter_factory or default_adapter_factory
        )

    def resolve(self, store_ids: Sequence[str]) -> list[StoreConfig]:
        """Map requested ids to configs, silently dropping unknown ones."""
        stores: list[StoreConfig] = []
        for store_id in store_ids:
            store = self.directory.get(store_id)
            if store is None:
                logger.debug("Ignoring unknown store id '%s'", store_id)
                continue
            stores.append(store)
        return stores

    async def search_store(
        self, query: str, store: StoreConfig,
    ) -> StoreOutcome:
        """Run one store's adapter; never raises."""
        try:
            adapter = self._adapter_factory(store)
            results: list[Product] = await adapter.search(query)
        except Exception as exc:
            logger.error(
                "Store '%s' failed for query '%s': %s",
                store.id,
                query,
                exc,
                exc_info=exc,
            )
            return StoreOutcome(results=[], error=str(exc) or type(exc).__name__)
        return StoreOutcome(results=list(results or []), error=None)

    async def search(
        self,
        query: str,
        store_ids: Sequence[str],
        category: str | None = None,
    ) -> SearchResponse:
        """Search every known store in *store_ids* concurrently.

        Store results come back in request order, whatever order the
        stores finish in.
        """
        stores = self.resolve(store_ids)
        logger.info(
            "Search '%s' across %d stores: %s",
            query,
            len(stores),
            ", ".join(s.id for s in stores),
        )

        outcomes = await asyncio.gather(
            *(self.search_store(query, store) for store in stores)
        )

        response = SearchResponse(
            query=query,
            category=category or None,
            timestamp=utc_timestamp(),
            stores=[
                StoreResult(
                    id=store.id,
                    name=store.name,
                    results=outcome.results,
                    error=outcome.error,
                )
                for store, outcome in zip(stores, outcomes)
            ],
        )

        logger.info(
            "Search '%s' completed: %d products from %d stores "
            "(%d failed)",
            query,
            response.total_results,
            len(stores),
            sum(1 for s in response.stores if s.error),
        )
        return response
