# threadfinder/models/search.py

"""Per-store and per-request search result containers."""

from dataclasses import dataclass, field
from typing import Any

from threadfinder.models.product import Product


@dataclass
class StoreResult:
    """Outcome of searching a single store."""

    id: str
    name: str
    results: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "results": [p.to_dict() for p in self.results],
            "error": self.error,
            "count": self.count,
        }


@dataclass
class SearchResponse:
    """Container for a completed search across multiple stores."""

    query: str
    timestamp: str
    category: str | None = None
    stores: list[StoreResult] = field(
        default_factory=lambda: list[StoreResult]()
    )

    @property
    def total_results(self) -> int:
        return sum(s.count for s in self.stores)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "category": self.category,
            "timestamp": self.timestamp,
            "stores": [s.to_dict() for s in self.stores],
        }
