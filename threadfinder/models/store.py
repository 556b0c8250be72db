# threadfinder/models/store.py

"""Store directory: the read-only registry of supported stores."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from threadfinder.config.settings import Settings


@dataclass(frozen=True)
class StoreConfig:
    """Static configuration for one upstream store."""

    id: str
    name: str
    tier: int
    adapter: str
    domain: str = ""
    color: str = ""
    logo: str = ""
    category: str = ""

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}" if self.domain else ""

    @classmethod
    def from_dict(cls, raw: dict[str, str]) -> "StoreConfig":
        return cls(
            id=raw["id"],
            name=raw["name"],
            tier=int(raw.get("tier", "2")),
            adapter=raw["adapter"],
            domain=raw.get("domain", ""),
            color=raw.get("color", ""),
            logo=raw.get("logo", ""),
            category=raw.get("category", ""),
        )


class StoreDirectory:
    """Immutable id -> :class:`StoreConfig` mapping.

    Built once at process start and handed to the aggregator, the API
    app and the CLI.  Tests construct their own directories from fixture
    entries instead of patching the global registry.
    """

    def __init__(self, stores: Iterable[StoreConfig]) -> None:
        self._stores: dict[str, StoreConfig] = {}
        for store in stores:
            if store.id in self._stores:
                raise ValueError(f"Duplicate store id: {store.id}")
            self._stores[store.id] = store

    @classmethod
    def from_settings(cls) -> "StoreDirectory":
        """Build the directory from ``Settings.STORES``."""
        return cls(StoreConfig.from_dict(s) for s in Settings.STORES)

    def get(self, store_id: str) -> StoreConfig | None:
        return self._stores.get(store_id)

    def __contains__(self, store_id: object) -> bool:
        return store_id in self._stores

    def __iter__(self) -> Iterator[StoreConfig]:
        return iter(self._stores.values())

    def __len__(self) -> int:
        return len(self._stores)

    def ids(self) -> list[str]:
        return list(self._stores)

    def by_category(self) -> dict[str, list[StoreConfig]]:
        """Group stores by their catalogue category, preserving order."""
        grouped: dict[str, list[StoreConfig]] = {}
        for store in self._stores.values():
            grouped.setdefault(store.category, []).append(store)
        return grouped
