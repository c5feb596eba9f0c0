"""
Club Manager API Server

FastAPI server that provides REST endpoints for clubs, players, contracts,
matches and the dashboard.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from slowapi import _rate_limit_exceeded_handler  # type: ignore
from slowapi.errors import RateLimitExceeded  # type: ignore

from clubmanager.api.routes import router, limiter as routes_limiter
from clubmanager.config import Settings
from clubmanager.database.db import Database, init_database
from clubmanager.database.init_defaults import init_defaults

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    numeric_level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=numeric_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Errors are always returned as {"error": "..."}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(status_code=400, content={"error": "; ".join(problems)})


def create_app(database: Optional[Database] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    When ``database`` is given it is used as-is (and not disposed on shutdown);
    otherwise one is created from settings during startup.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan handler for startup and shutdown events."""
        logger.info("Starting up Club Manager API...")
        owns_database = getattr(app.state, "db", None) is None
        if owns_database:
            app.state.db = Database.from_settings(settings)

        # Fallback for databases that have not been migrated yet
        try:
            await init_database(app.state.db)
            logger.info("Database initialized")
        except Exception as e:
            logger.error(f"Database initialization failed: {e}", exc_info=True)

        if settings.seed_defaults:
            try:
                await init_defaults(app.state.db, settings)
            except Exception as e:
                logger.error(f"Failed to initialize defaults: {e}", exc_info=True)

        yield  # App is running

        logger.info("Shutting down Club Manager API...")
        if owns_database:
            await app.state.db.dispose()
            app.state.db = None
            logger.info("✓ Connection pool closed")

    app = FastAPI(
        title="Club Manager API",
        description="API for managing football clubs, players, contracts and matches",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = database

    # Setup rate limiter
    app.state.limiter = routes_limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


_settings = Settings.from_env()
configure_logging(_settings)
app = create_app(settings=_settings)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=5000)
