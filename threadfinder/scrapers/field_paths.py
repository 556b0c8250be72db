# threadfinder/scrapers/field_paths.py

"""Ordered field fallbacks for heterogeneous store payloads.

Stores spell the same attribute several ways (``name`` vs ``title``,
nested ``price.current.text`` vs flat ``sale_price``).  Each adapter
declares a :class:`FieldMap` listing accessors per attribute in
priority order; the first accessor yielding a non-empty value wins.

An accessor is either a dotted path (``"images.0.url"``, integer
segments index into lists) or a callable taking the item.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from threadfinder.models.product import CandidateRecord

Accessor = str | Callable[[Any], Any]


def get_path(data: Any, path: str) -> Any:
    """Walk a dotted path through nested dicts/lists; ``None`` if absent."""
    current = data
    for segment in path.split("."):
        if isinstance(current, dict):
            current = current.get(segment)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def is_present(value: Any) -> bool:
    """True for anything but ``None``, blank strings and empty containers."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def resolve(data: Any, accessor: Accessor) -> Any:
    if callable(accessor):
        return accessor(data)
    return get_path(data, accessor)


def first_value(data: Any, accessors: Sequence[Accessor]) -> Any:
    """Return the first present value among *accessors*, else ``None``."""
    for accessor in accessors:
        value = resolve(data, accessor)
        if is_present(value):
            return value
    return None


def any_of(*accessors: Accessor) -> Callable[[Any], Any]:
    """Combine alternatives into a single accessor."""
    return lambda data: first_value(data, accessors)


def prefixed(prefix: str, accessor: Accessor) -> Callable[[Any], Any]:
    """Accessor yielding ``prefix + value`` when the value is present."""

    def _get(data: Any) -> str | None:
        value = resolve(data, accessor)
        return f"{prefix}{value}" if is_present(value) else None

    return _get


def joined(*accessors: Accessor, sep: str = " ") -> Callable[[Any], Any]:
    """Accessor joining every present part, ``None`` if all are missing."""

    def _get(data: Any) -> str | None:
        parts = [
            str(value).strip()
            for value in (resolve(data, a) for a in accessors)
            if is_present(value)
        ]
        return sep.join(parts) if parts else None

    return _get


@dataclass(frozen=True)
class FieldMap:
    """Per-attribute accessor lists for one store's item payload."""

    title: Sequence[Accessor]
    price: Sequence[Accessor]
    image: Sequence[Accessor]
    link: Sequence[Accessor]

    def extract(self, item: Any) -> CandidateRecord:
        return CandidateRecord(
            title=_as_text(first_value(item, self.title)),
            price=first_value(item, self.price),
            image=_as_text(first_value(item, self.image)),
            link=_as_text(first_value(item, self.link)),
        )


def _as_text(value: Any) -> str | None:
    return str(value) if is_present(value) else None
