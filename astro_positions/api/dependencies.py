from functools import lru_cache

from fastapi import Depends, HTTPException, status

from astro_positions.config import Settings, settings
from astro_positions.domain.ephemeris.provider import (
    EphemerisProvider,
    SwissEphemerisProvider,
)
from astro_positions.services.position_service import PositionService


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_provider() -> EphemerisProvider:
    """
    Process-wide ephemeris provider.

    Built and self-checked once; ProviderConfigurationError propagates so an
    incompatible swisseph build stops the service at startup.
    """
    provider = SwissEphemerisProvider(ephe_path=settings.EPHE_PATH)
    provider.self_check()
    return provider


def get_position_service(
    provider: EphemerisProvider = Depends(get_provider),
) -> PositionService:
    return PositionService(provider)


def require_debug(config: Settings = Depends(get_settings)) -> Settings:
    """
    Hide diagnostics unless DEBUG is on.
    """
    if not config.DEBUG:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return config
