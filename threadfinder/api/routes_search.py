# threadfinder/api/routes_search.py

"""POST /api/search: validate, fan out, return per-store results."""

import logging
import re
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from threadfinder.api.schemas import SearchRequest, SearchResponseOut
from threadfinder.config.settings import Settings
from threadfinder.core.exceptions import SearchValidationError

logger = logging.getLogger("threadfinder.api")

router = APIRouter(prefix="/api", tags=["search"])

_UNSAFE_CHARS_RE = re.compile(r"[<>{}]")


def sanitize_query(query: str) -> str:
    """Trim, drop angle/curly brackets and cap the length."""
    cleaned = _UNSAFE_CHARS_RE.sub("", query.strip())
    return cleaned[: Settings.MAX_QUERY_LENGTH]


def validate_search_request(body: SearchRequest) -> tuple[str, list[str]]:
    """Return the sanitized query and requested store ids.

    Raises SearchValidationError before anything is dispatched.
    """
    query: Any = body.query
    if not isinstance(query, str) or not query.strip():
        raise SearchValidationError("Search query is required")

    stores: Any = body.stores
    if not isinstance(stores, list) or not stores:
        raise SearchValidationError("At least one store must be selected")

    sanitized = sanitize_query(query)
    if not sanitized:
        raise SearchValidationError("Search query is required")

    return sanitized, [s for s in stores if isinstance(s, str)]


@router.options("/search")
def search_preflight() -> Response:
    # CORSMiddleware answers real preflights; this covers bare OPTIONS
    return Response(status_code=200)


@router.post("/search", response_model=SearchResponseOut)
async def search(body: SearchRequest, request: Request) -> Any:
    """Search the requested stores concurrently.

    Per-store failures are reported inside the body; only an unexpected
    aggregator failure turns into a 500.
    """
    query, store_ids = validate_search_request(body)
    logger.info("[SEARCH] Query: '%s' | Stores: %s", query, ", ".join(store_ids))

    aggregator = request.app.state.aggregator
    try:
        response = await aggregator.search(query, store_ids, body.category)
    except Exception:
        logger.error("[SEARCH] Error for query '%s'", query, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Search failed. Please try again."},
        )

    return response.to_dict()
