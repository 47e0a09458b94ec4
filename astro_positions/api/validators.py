"""
Query Parameter Validation

Every position/houses route parses raw query strings through these helpers.
Each failure raises InvalidQueryError naming the offending parameter, so the
client learns exactly which field to fix.
"""

import datetime as dt
import math
import re
from typing import Optional

from astro_positions.domain.ephemeris.errors import InvalidQueryError
from astro_positions.domain.ephemeris.schemas import PositionQuery


# Single-letter Swiss Ephemeris house systems yielding 12 cusps
# ('G', Gauquelin sectors, yields 36 and is excluded).
HOUSE_SYSTEMS = frozenset("ABCDEFHIKLMNOPQRSTUVWXY")

TZ_OFFSET_LIMIT = 900


def _require(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise InvalidQueryError(field, f"Missing required parameter: {field}")
    return value.strip()


def validate_date_format(date_str: str, field: str = "date") -> dt.date:
    """Validate ISO date format (YYYY-MM-DD)."""
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise InvalidQueryError(field, "Invalid date format. Use YYYY-MM-DD")
    try:
        return dt.date.fromisoformat(date_str)
    except ValueError:
        raise InvalidQueryError(field, f"Invalid calendar date: {date_str}") from None


def validate_time_format(time_str: str, field: str = "time") -> dt.time:
    """Validate time format (HH:MM or HH:MM:SS, 24h)."""
    match = re.match(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$", time_str)
    if not match:
        raise InvalidQueryError(field, "Invalid time format. Use HH:MM or HH:MM:SS")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidQueryError(field, f"Time out of range: {time_str}")
    return dt.time(hour, minute, second)


def _parse_float(value: str, field: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise InvalidQueryError(field, f"{field} must be a number") from None
    if not math.isfinite(number):
        raise InvalidQueryError(field, f"{field} must be a finite number")
    return number


def validate_latitude(value: str, field: str = "lat") -> float:
    """Validate latitude range."""
    lat = _parse_float(value, field)
    if lat < -90 or lat > 90:
        raise InvalidQueryError(field, "Latitude must be between -90 and 90")
    return lat


def validate_longitude(value: str, field: str = "lng") -> float:
    """Validate longitude range."""
    lon = _parse_float(value, field)
    if lon < -180 or lon > 180:
        raise InvalidQueryError(field, "Longitude must be between -180 and 180")
    return lon


def validate_tz_offset(value: Optional[str], field: str = "tz_offset_minutes") -> int:
    if value is None or not value.strip():
        return 0
    try:
        offset = int(value.strip())
    except ValueError:
        raise InvalidQueryError(field, f"{field} must be an integer") from None
    if abs(offset) > TZ_OFFSET_LIMIT:
        raise InvalidQueryError(
            field,
            f"{field} must be between -{TZ_OFFSET_LIMIT} and {TZ_OFFSET_LIMIT}",
        )
    return offset


def validate_house_system(
    value: Optional[str], default: str, field: str = "house_system"
) -> str:
    code = (value or "").strip() or default
    code = code.upper()
    if len(code) != 1 or code not in HOUSE_SYSTEMS:
        raise InvalidQueryError(field, f"Unsupported house system: {code}")
    return code


def parse_position_query(
    *,
    date: Optional[str],
    time: Optional[str],
    lat: Optional[str],
    lng: Optional[str],
    house_system: Optional[str],
    tz_offset_minutes: Optional[str],
    default_house_system: str = "P",
) -> PositionQuery:
    """
    Build a PositionQuery from raw query strings.

    Fields are checked in order: presence of date, time, lat, lng first,
    then each value's format and range.
    """
    date_str = _require(date, "date")
    time_str = _require(time, "time")
    lat_str = _require(lat, "lat")
    lng_str = _require(lng, "lng")

    return PositionQuery(
        date=validate_date_format(date_str),
        time=validate_time_format(time_str),
        latitude=validate_latitude(lat_str),
        longitude=validate_longitude(lng_str),
        tz_offset_minutes=validate_tz_offset(tz_offset_minutes),
        house_system=validate_house_system(house_system, default_house_system),
    )
