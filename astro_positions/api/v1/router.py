from fastapi import APIRouter

from astro_positions.api.v1.routes.health import router as health_router
from astro_positions.api.v1.routes.positions import router as positions_router
from astro_positions.api.v1.routes.chat import router as chat_router
from astro_positions.api.v1.routes.debug import router as debug_router

api_router = APIRouter()

# ─────────────────────────────────────────────
# Public Routes
# ─────────────────────────────────────────────

api_router.include_router(
    health_router,
    tags=["Health"],
)

api_router.include_router(
    positions_router,
    tags=["Positions"],
)

api_router.include_router(
    chat_router,
    tags=["Chat"],
)

# ─────────────────────────────────────────────
# Diagnostics
# ─────────────────────────────────────────────

api_router.include_router(
    debug_router,
    tags=["Debug"],
)
