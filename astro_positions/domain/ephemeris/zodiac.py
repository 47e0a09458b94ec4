"""
Degree, sign and time-base arithmetic shared by every chart computation.
"""

import math

from astro_positions.domain.ephemeris.schemas import Angle


SIGNS = [
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
]


# ─────────────────────────────────────────────
# Degrees & Signs
# ─────────────────────────────────────────────

def normalize_degree(x: float) -> float:
    """Reduce an angle to [0, 360)."""
    return ((x % 360.0) + 360.0) % 360.0


def zodiac_sign(degree: float) -> str:
    return SIGNS[int(normalize_degree(degree) // 30) % 12]


def to_angle(x: float) -> Angle:
    deg = normalize_degree(x)
    return Angle(degree=deg, sign=zodiac_sign(deg))


# ─────────────────────────────────────────────
# Time
# ─────────────────────────────────────────────

def to_julian_day(year: int, month: int, day: int, ut_hours: float) -> float:
    """
    Julian Day for a proleptic Gregorian date at `ut_hours` UT.

    Integer civil-calendar algorithm, exact for whole and half days:
    to_julian_day(1992, 9, 8, 12) == 2448874.0
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    jdn = (
        day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )
    return jdn - 0.5 + ut_hours / 24.0


def local_to_ut(local_hours: float, tz_offset_minutes: int) -> float:
    """Offsets are positive east of UTC."""
    return local_hours - tz_offset_minutes / 60.0


def is_finite_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
