# threadfinder/api/main.py

"""FastAPI application for threadfinder.

Run locally::

    threadfinder --serve
    python -m uvicorn threadfinder.api.main:app --reload --port 8000

Try it::

    curl -i http://127.0.0.1:8000/health
    curl -i -X POST http://127.0.0.1:8000/api/search \\
        -H 'Content-Type: application/json' \\
        -d '{"query": "linen dress", "stores": ["whitefox", "asos"]}'
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from threadfinder.api.routes_search import router as search_router
from threadfinder.api.routes_stores import router as stores_router
from threadfinder.config.settings import Settings
from threadfinder.core.exceptions import SearchValidationError
from threadfinder.models.store import StoreDirectory
from threadfinder.services.search_aggregator import SearchAggregator

logger = logging.getLogger("threadfinder.api")


def create_app(
    directory: StoreDirectory | None = None,
    aggregator: SearchAggregator | None = None,
) -> FastAPI:
    """Build the API app around a store directory and an aggregator.

    Args:
        directory: Stores to expose; the configured registry when omitted.
        aggregator: Search backend; one over *directory* when omitted.
            Tests pass a fake here.

    Returns:
        The configured FastAPI application.
    """
    if directory is None:
        directory = StoreDirectory.from_settings()

    app = FastAPI(
        title="threadfinder API",
        version="0.1.0",
        description="Clothing search aggregated across thirteen retailers",
    )
    app.state.directory = directory
    if aggregator is None:
        aggregator = SearchAggregator(directory)
    app.state.aggregator = aggregator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Every error body is {"error": "<message>"}
    @app.exception_handler(SearchValidationError)
    async def validation_error_handler(
        request: Request, exc: SearchValidationError,
    ) -> JSONResponse:
        logger.info("Rejected search request: %s", exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def body_error_handler(
        request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        logger.info("Rejected malformed request body: %s", exc.errors())
        return JSONResponse(
            status_code=400, content={"error": "Invalid request body"}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == 405:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.get("/health")
    def health() -> dict[str, bool]:
        """Liveness check."""
        return {"ok": True}

    app.include_router(search_router)
    app.include_router(stores_router)

    return app


app = create_app()
