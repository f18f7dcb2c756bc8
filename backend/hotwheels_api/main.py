"""
HotWheels API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, middleware registration, route mounting
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn hotwheels_api.main:app`) or the `hotwheels-api`
       console script (run() below).

Application Architecture:
    ┌───────────────────────────────────────────────┐
    │                  FastAPI App                  │
    │                                               │
    │  Middleware:   Request ID → Access Logging    │
    │                                               │
    │  Route:        GET /{full_path:path}          │
    │                  ├─ .../all-models/...  list  │
    │                  ├─ .../modelo/<id>/... detail│
    │                  └─ anything else       welcome
    │                                               │
    │  Errors:       NotFoundError → 404 JSON       │
    │                anything else → 500 text       │
    └───────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate settings (logged, not fatal)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request

from hotwheels_api import __version__
from hotwheels_api.config import settings
from hotwheels_api.database import dispose_engine
from hotwheels_api.exceptions import NotFoundError
from hotwheels_api.middleware.logging import RequestLoggingMiddleware
from hotwheels_api.middleware.request_id import RequestIDMiddleware
from hotwheels_api.routes import catalog
from hotwheels_api.routes.catalog import not_found_response

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, on stdout
    (container runtimes collect stdout). Called once, from the lifespan,
    before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # hotwheels.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("HotWheels API %s starting up...", __version__)

    # A missing storage account only breaks image URLs; keep serving rows
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info(
        "Catalog table %r, list ceiling %d rows, images under %s",
        settings.catalog_table,
        settings.max_records,
        settings.image_base_url,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("HotWheels API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    App-level mapping for NotFoundError.

    The catalog dispatcher already converts its own errors; this covers a
    NotFoundError raised anywhere else (e.g. a future dependency) so the
    404 body is the same everywhere. Unexpected errors are deliberately
    not handled here: the dispatcher is the single fault boundary.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return not_found_response(exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Interactive docs are off unless EXPOSE_DOCS is set: their routes would
    otherwise shadow the catch-all catalog route for /docs, /redoc and
    /openapi.json, which must answer with the welcome payload.
    """
    docs_enabled = settings.expose_docs
    app = FastAPI(
        title="HotWheels API",
        description=(
            "Read-only JSON API over a Hot Wheels model car catalog. "
            "Rows are enriched with a public image URL and a single category label."
        ),
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(catalog.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve `app` with uvicorn on the configured host/port."""
    uvicorn.run(
        "hotwheels_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
