# threadfinder/api/routes_stores.py

"""Read-only directory endpoints: stores and clothing categories."""

from typing import Any

from fastapi import APIRouter, Request

from threadfinder.api.schemas import CategoriesResponse, StoresResponse
from threadfinder.config.settings import Settings
from threadfinder.models.store import StoreConfig

router = APIRouter(prefix="/api", tags=["stores"])


def _store_out(store: StoreConfig) -> dict[str, Any]:
    # searchUrl stays for frontend compatibility; search goes via /api/search
    return {
        "id": store.id,
        "name": store.name,
        "color": store.color,
        "logo": store.logo,
        "category": store.category,
        "searchUrl": "#",
    }


@router.get("/stores", response_model=StoresResponse)
def list_stores(request: Request) -> dict[str, Any]:
    """Every store, the store categories and stores grouped by category."""
    directory = request.app.state.directory
    by_category: dict[str, list[dict[str, Any]]] = {
        category: [_store_out(s) for s in stores]
        for category, stores in directory.by_category().items()
    }
    return {
        "stores": [_store_out(s) for s in directory],
        "categories": Settings.STORE_CATEGORIES,
        "byCategory": by_category,
    }


@router.get("/categories", response_model=CategoriesResponse)
def list_categories() -> dict[str, Any]:
    return {"categories": Settings.CLOTHING_CATEGORIES}
