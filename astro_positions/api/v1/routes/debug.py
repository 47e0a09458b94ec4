from typing import Any, Dict

from fastapi import APIRouter, Depends

from astro_positions.api.dependencies import get_provider, require_debug
from astro_positions.config import Settings
from astro_positions.domain.ephemeris.provider import EphemerisProvider

router = APIRouter()


@router.get("/debug", summary="Ephemeris provider diagnostics")
def provider_debug(
    config: Settings = Depends(require_debug),
    provider: EphemerisProvider = Depends(get_provider),
) -> Dict[str, Any]:
    """
    What the running provider build exposes. Only served with DEBUG on.
    """
    return {
        "env": config.ENV,
        **provider.describe(),
    }
