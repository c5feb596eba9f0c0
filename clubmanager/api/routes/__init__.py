"""
API routes - combined router from all domain modules.

Shared infrastructure (limiter, error mapping) lives here; every sub-router
imports what it needs from this package.
"""

import logging
import os

from fastapi import APIRouter, HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address

from clubmanager.services.validation import is_store_validation_error, store_error_message

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared rate limiter
# ---------------------------------------------------------------------------
IS_TEST_ENV = os.getenv("ENV", "").lower() == "test"
limiter = Limiter(key_func=get_remote_address, enabled=not IS_TEST_ENV)

# ---------------------------------------------------------------------------
# Shared constants and helpers
# ---------------------------------------------------------------------------
INVALID_CREDENTIALS_RESPONSE = HTTPException(
    status_code=401, detail="Invalid username or password"
)


def not_found(entity: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{entity} not found")


def service_error(exc: Exception, message: str) -> HTTPException:
    """
    Map an unexpected exception from the service layer to an HTTP error.

    Store-side rejections of the data (constraints, triggers) are the caller's
    to fix and become 400; anything else is an infrastructure failure (500).
    """
    if is_store_validation_error(exc):
        detail = store_error_message(exc)
        logger.warning(f"{message}: rejected by database: {detail}")
        return HTTPException(status_code=400, detail=detail)
    logger.error(f"{message}: {exc}", exc_info=True)
    return HTTPException(status_code=500, detail=message)


# ---------------------------------------------------------------------------
# Import sub-routers and combine
# ---------------------------------------------------------------------------
from clubmanager.api.routes.clubs import router as clubs_router  # noqa: E402
from clubmanager.api.routes.players import router as players_router  # noqa: E402
from clubmanager.api.routes.matches import router as matches_router  # noqa: E402
from clubmanager.api.routes.contracts import router as contracts_router  # noqa: E402
from clubmanager.api.routes.dashboard import router as dashboard_router  # noqa: E402
from clubmanager.api.routes.auth import router as auth_router  # noqa: E402
from clubmanager.api.routes.health import router as health_router  # noqa: E402

router = APIRouter()
router.include_router(clubs_router)
router.include_router(players_router)
router.include_router(matches_router)
router.include_router(contracts_router)
router.include_router(dashboard_router)
router.include_router(auth_router)
router.include_router(health_router)
