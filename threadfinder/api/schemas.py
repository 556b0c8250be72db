# threadfinder/api/schemas.py

"""Pydantic request and response bodies for the HTTP API.

Field names are camelCase where the frontend reads them that way
(``storeName``, ``searchUrl``, ``byCategory``).
"""

from typing import Any

from pydantic import BaseModel


class SearchRequest(BaseModel):
    """Body of POST /api/search."""

    # Loosely typed: validate_search_request reports shape errors
    query: Any = None
    stores: Any = None
    category: Any = None


class ProductOut(BaseModel):
    id: str
    store: str
    storeName: str
    title: str
    price: str  # "$29.99" or "See price"
    image: str  # https URL or inline SVG placeholder
    link: str


class StoreResultOut(BaseModel):
    id: str
    name: str
    results: list[ProductOut]
    error: str | None = None
    count: int


class SearchResponseOut(BaseModel):
    query: str
    category: Any = None
    timestamp: str
    stores: list[StoreResultOut]


class StoreOut(BaseModel):
    id: str
    name: str
    color: str
    logo: str
    category: str
    searchUrl: str = "#"


class StoreCategoryOut(BaseModel):
    name: str
    icon: str


class StoresResponse(BaseModel):
    """Body of GET /api/stores."""

    stores: list[StoreOut]
    categories: dict[str, StoreCategoryOut]
    byCategory: dict[str, list[StoreOut]]


class ClothingCategoryOut(BaseModel):
    id: str
    name: str
    icon: str


class CategoriesResponse(BaseModel):
    """Body of GET /api/categories."""

    categories: list[ClothingCategoryOut]
