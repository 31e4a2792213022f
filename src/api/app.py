"""FastAPI application factory.

The caller (``main.py`` or a test) owns construction of the store and the
oracle provider; the app only wires them into request handlers.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import routes
from src.api.live import LiveHub
from src.core.config import Settings
from src.core.store import MemoryStore, StoreError
from src.oracle import OracleProvider
from src.pipeline.assistant import Assistant
from src.pipeline.matcher import BusinessMatcher

logger = logging.getLogger(__name__)

_LOG_LINE_LIMIT = 80


def create_app(settings: Settings, store: MemoryStore, provider: OracleProvider) -> FastAPI:
    """Build the API around an already constructed store and oracle provider."""
    app = FastAPI(title="Marketplace Matchmaker API")

    app.state.settings = settings
    app.state.store = store
    app.state.matcher = BusinessMatcher(provider, settings.matching)
    app.state.assistant = Assistant(provider, settings.assistant)
    app.state.hub = LiveHub()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
        """Log one line per API request: method, path, status, duration."""
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if path.startswith("/api"):
            duration_ms = (time.perf_counter() - start) * 1000
            line = f"{request.method} {path} {response.status_code} in {duration_ms:.0f}ms"
            if len(line) > _LOG_LINE_LIMIT:
                line = line[: _LOG_LINE_LIMIT - 1] + "…"
            logger.info(line)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": jsonable_encoder(exc.errors())})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(routes.router)
    return app
