import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from astro_positions.api.dependencies import get_position_service, get_settings
from astro_positions.api.validators import (
    parse_position_query,
    validate_house_system,
    validate_latitude,
    validate_longitude,
)
from astro_positions.config import Settings
from astro_positions.domain.ephemeris.errors import (
    HousesUnavailableError,
    InvalidQueryError,
)
from astro_positions.services.position_service import PositionService

logger = logging.getLogger(__name__)

router = APIRouter()


# ─────────────────────────────────────────────
# Full chart
# ─────────────────────────────────────────────

@router.get(
    "/positions",
    summary="Planet positions, houses and angles for a moment and place",
)
def get_positions(
    date: Optional[str] = Query(None, description="YYYY-MM-DD", examples=["1992-09-08"]),
    time: Optional[str] = Query(None, description="HH:MM[:SS], 24h", examples=["12:00"]),
    lat: Optional[str] = Query(None, description="Latitude, -90..90"),
    lng: Optional[str] = Query(None, description="Longitude, -180..180"),
    house_system: Optional[str] = Query(None, description="Single-letter house system"),
    hsys: Optional[str] = Query(None, description="Alias of house_system"),
    tz_offset_minutes: Optional[str] = Query(None, description="Minutes east of UTC"),
    service: PositionService = Depends(get_position_service),
    config: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Compute the ten major bodies, then house cusps and angles.

    A body the provider cannot compute is reported with sign "Unknown";
    when houses cannot be computed the planets are still returned.
    """
    query = parse_position_query(
        date=date,
        time=time,
        lat=lat,
        lng=lng,
        house_system=house_system or hsys,
        tz_offset_minutes=tz_offset_minutes,
        default_house_system=config.DEFAULT_HOUSE_SYSTEM,
    )

    try:
        return service.get_positions(query)
    except Exception:
        logger.exception("Position computation failed for %s", query.to_dict())
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


# ─────────────────────────────────────────────
# Houses only
# ─────────────────────────────────────────────

@router.get(
    "/houses",
    summary="House cusps and angles only",
)
def get_houses(
    lat: Optional[str] = Query(None, description="Latitude, -90..90"),
    lng: Optional[str] = Query(None, description="Longitude, -180..180"),
    hsys: Optional[str] = Query(None, description="Single-letter house system"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD; defaults to the sample moment"),
    time: Optional[str] = Query(None, description="HH:MM[:SS]; required with date"),
    tz_offset_minutes: Optional[str] = Query(None, description="Minutes east of UTC"),
    service: PositionService = Depends(get_position_service),
    config: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Houses at 1992-09-08 12:00 UT unless `date` and `time` are given.
    """
    if lat is None or lng is None:
        raise InvalidQueryError(
            "lat" if lat is None else "lng",
            "Provide lat and lng query params, e.g. ?lat=-34.9285&lng=138.6007&hsys=P",
        )

    query = None
    if date or time:
        query = parse_position_query(
            date=date,
            time=time,
            lat=lat,
            lng=lng,
            house_system=hsys,
            tz_offset_minutes=tz_offset_minutes,
            default_house_system=config.DEFAULT_HOUSE_SYSTEM,
        )

    latitude = validate_latitude(lat)
    longitude = validate_longitude(lng)
    house_system = validate_house_system(hsys, config.DEFAULT_HOUSE_SYSTEM, field="hsys")

    try:
        return service.get_houses(
            latitude=latitude,
            longitude=longitude,
            house_system=house_system,
            query=query,
        )
    except HousesUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"houses unavailable: {e}",
        )
    except Exception:
        logger.exception("House computation failed at %s, %s", latitude, longitude)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


# ─────────────────────────────────────────────
# Sample
# ─────────────────────────────────────────────

@router.get(
    "/sample",
    summary="Sun and Moon at a fixed moment (provider smoke test)",
)
def get_sample(
    service: PositionService = Depends(get_position_service),
) -> Dict[str, Any]:
    try:
        return service.get_sample()
    except Exception:
        logger.exception("Sample computation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
