# src/api/app.py

"""FastAPI application exposing the aggregation pipeline.

Run locally:
    python main.py serve
    curl "http://127.0.0.1:3000/api/prices?query=iphone%2015&country=US"
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config.settings import Settings
from src.models.query import SearchQuery
from src.services.price_aggregator import PriceAggregator

logger = logging.getLogger("price_aggregator.api")

INVALID_PARAMS_MESSAGE = (
    'Invalid query parameters. "country" and "query" are required.'
)
NO_RESULTS_MESSAGE = "No products found matching the query."


def _error_details(exc: Exception) -> dict[str, str]:
    """Exception message for diagnostics, hidden in production."""
    if Settings.is_production():
        return {}
    return {"details": str(exc) or exc.__class__.__name__}


def create_app(aggregator: PriceAggregator | None = None) -> FastAPI:
    """Build the app; one aggregator is shared by every request."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: PriceAggregator | None = None
        if app.state.aggregator is None:
            owned = PriceAggregator()
            app.state.aggregator = owned
        logger.info("API started (env=%s)", Settings.APP_ENV)
        try:
            yield
        finally:
            if owned is not None:
                await owned.interpreter.client.aclose()
            logger.info("API shutting down")

    app = FastAPI(
        title="Product Price Aggregator",
        version="0.1.0",
        description="Cheapest matching offers across e-commerce sites.",
        lifespan=lifespan,
    )
    app.state.aggregator = aggregator

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not Found",
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return JSONResponse(
            status_code=exc.status_code, content={"error": exc.detail}
        )

    @app.exception_handler(Exception)
    async def unhandled_error(
        request: Request, exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", **_error_details(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "env": Settings.APP_ENV,
        }

    @app.get("/api/prices", response_model=None)
    async def fetch_prices(
        request: Request,
        query: str | None = None,
        country: str | None = None,
    ) -> JSONResponse:
        """Ranked offers for ``query`` in ``country``."""
        query = (query or "").strip()
        country = (country or "").strip()
        logger.info("Received query=%r country=%r", query, country)

        if not query or not country:
            return JSONResponse(
                status_code=400, content={"error": INVALID_PARAMS_MESSAGE}
            )

        aggregator: PriceAggregator = request.app.state.aggregator
        start = time.monotonic()
        try:
            results = await aggregator.aggregate(
                SearchQuery(query=query, country=country)
            )
        except Exception as exc:
            logger.error("Error in fetch_prices: %s", exc, exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Failed to fetch prices",
                    **_error_details(exc),
                },
            )
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Query processed in %dms, found %d results",
            elapsed_ms,
            len(results),
        )

        if not results:
            return JSONResponse(
                status_code=200,
                content={
                    "message": NO_RESULTS_MESSAGE,
                    "results": [],
                    "searchInfo": {
                        "query": query,
                        "country": country,
                        "processingTime": elapsed_ms,
                    },
                },
            )
        return JSONResponse(
            status_code=200,
            content=[r.to_response() for r in results],
        )

    return app
