"""
Ephemeris domain

Canonical chart model plus the decoders that turn raw Swiss Ephemeris
results into it.
"""

from astro_positions.domain.ephemeris.calculator import SAMPLE_MOMENT, ChartCalculator
from astro_positions.domain.ephemeris.errors import (
    EphemerisError,
    HousesUnavailableError,
    InvalidQueryError,
    ProviderCalculationError,
    ProviderConfigurationError,
)
from astro_positions.domain.ephemeris.normalizer import (
    assign_houses,
    decode_houses,
    extract_longitude,
    extract_retrograde,
    extract_speed,
    house_of,
)
from astro_positions.domain.ephemeris.zodiac import (
    SIGNS,
    local_to_ut,
    normalize_degree,
    to_julian_day,
    zodiac_sign,
)

__all__ = [
    "SAMPLE_MOMENT",
    "ChartCalculator",
    "EphemerisError",
    "HousesUnavailableError",
    "InvalidQueryError",
    "ProviderCalculationError",
    "ProviderConfigurationError",
    "assign_houses",
    "decode_houses",
    "extract_longitude",
    "extract_retrograde",
    "extract_speed",
    "house_of",
    "SIGNS",
    "local_to_ut",
    "normalize_degree",
    "to_julian_day",
    "zodiac_sign",
]
