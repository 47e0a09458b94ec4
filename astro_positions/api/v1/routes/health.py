from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from astro_positions.api.dependencies import get_settings
from astro_positions.config import Settings

router = APIRouter()


@router.get("/health", summary="Health check")
def health_check(
    response: Response,
    config: Settings = Depends(get_settings),
):
    """
    Uptime/readiness probe. Never cached.
    """
    response.headers["Cache-Control"] = "no-store"
    return {
        "ok": True,
        "service": config.APP_NAME,
        "time": datetime.now(timezone.utc).isoformat(),
        "version": config.VERSION,
    }
