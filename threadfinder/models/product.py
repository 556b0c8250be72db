# threadfinder/models/product.py

"""Product data models for inter-module data flow."""

from dataclasses import dataclass
from typing import Any


@dataclass
class CandidateRecord:
    """Raw, unnormalised item exactly as one store returned it."""

    title: str | None = None
    price: str | float | int | None = None
    image: str | None = None
    link: str | None = None


@dataclass
class Product:
    """A normalised, display-ready listing from any store."""

    id: str
    store: str
    store_name: str
    title: str
    price: str
    image: str
    link: str

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the frontend's field names."""
        return {
            "id": self.id,
            "store": self.store,
            "storeName": self.store_name,
            "title": self.title,
            "price": self.price,
            "image": self.image,
            "link": self.link,
        }
