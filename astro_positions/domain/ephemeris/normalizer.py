"""
Decoders for raw ephemeris provider results.

Provider builds disagree on return shapes. A position may come back as
- a plain number
- a sequence whose first element is the longitude
- pyswisseph's ``(xx, retflag)`` pair, where ``xx[0]`` is the longitude
- a mapping/object exposing a ``data`` vector, or ``longitude`` / ``lon``

The decoders below accept all of them in a fixed priority order and map
anything undecodable to ``None`` instead of raising.
"""

from collections.abc import Mapping, Sequence
from typing import Any, List, Optional, Tuple

from astro_positions.domain.ephemeris.schemas import (
    UNKNOWN_SIGN,
    Angle,
    Angles,
    CelestialBody,
    HouseCusps,
)
from astro_positions.domain.ephemeris.zodiac import (
    is_finite_number,
    normalize_degree,
    to_angle,
    zodiac_sign,
)


_MISSING = object()


def _field(result: Any, name: str) -> Any:
    """Mapping key or attribute lookup."""
    if isinstance(result, Mapping):
        return result.get(name, _MISSING)
    return getattr(result, name, _MISSING)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _finite(value: Any) -> Optional[float]:
    return float(value) if is_finite_number(value) else None


def _vector_item(vector: Any, index: int) -> Optional[float]:
    if _is_sequence(vector) and len(vector) > index:
        return _finite(vector[index])
    return None


# ─────────────────────────────────────────────
# Positions
# ─────────────────────────────────────────────

def extract_longitude(result: Any) -> Optional[float]:
    if result is None:
        return None

    if not _is_sequence(result) and not is_finite_number(result):
        data = _field(result, "data")
        if _is_sequence(data):
            value = _vector_item(data, 0)
            if value is not None:
                return value

        for name in ("longitude", "lon"):
            value = _finite(_field(result, name))
            if value is not None:
                return value

    if _is_sequence(result) and result:
        head = result[0]
        if _is_sequence(head):
            return _vector_item(head, 0)
        return _finite(head)

    return _finite(result)


def extract_speed(result: Any) -> Optional[float]:
    if result is None or is_finite_number(result):
        return None

    if not _is_sequence(result):
        value = _vector_item(_field(result, "data"), 3)
        if value is not None:
            return value
        for name in ("longitudeSpeed", "speed", "speed_lon"):
            value = _finite(_field(result, name))
            if value is not None:
                return value
        return None

    if result and _is_sequence(result[0]):
        return _vector_item(result[0], 3)
    return _vector_item(result, 3)


def extract_retrograde(result: Any) -> bool:
    """
    Explicit flag first, then the sign of the longitudinal speed.
    """
    if result is not None and not _is_sequence(result):
        for name in ("retrograde", "retro"):
            flag = _field(result, name)
            if isinstance(flag, bool):
                return flag

    speed = extract_speed(result)
    return speed is not None and speed < 0


def build_body(name: str, result: Any) -> CelestialBody:
    longitude = extract_longitude(result)
    if longitude is None:
        return CelestialBody(
            name=name,
            degree=None,
            sign=UNKNOWN_SIGN,
            retrograde=extract_retrograde(result),
        )

    degree = normalize_degree(longitude)
    return CelestialBody(
        name=name,
        degree=degree,
        sign=zodiac_sign(degree),
        retrograde=extract_retrograde(result),
    )


# ─────────────────────────────────────────────
# Houses & Angles
# ─────────────────────────────────────────────

def decode_houses(result: Any) -> Tuple[Optional[HouseCusps], Angles]:
    """
    Decode a houses result into (cusps, angles).

    Accepts a mapping with ``houseCusps``/``cusps``/``houses`` and
    ``ascendant``/``asc``, ``mc``/``MC``; pyswisseph's ``(cusps, ascmc)``;
    or ``(cusps, asc, mc)``.
    """
    raw_cusps: Any = None
    asc: Any = None
    mc: Any = None

    if _is_sequence(result) and result:
        raw_cusps = result[0]
        if len(result) > 1 and _is_sequence(result[1]):
            asc = _vector_item(result[1], 0)
            mc = _vector_item(result[1], 1)
        else:
            asc = result[1] if len(result) > 1 else None
            mc = result[2] if len(result) > 2 else None
    elif result is not None:
        raw_cusps = _first_present(result, ("houseCusps", "cusps", "houses"))
        asc = _first_present(result, ("ascendant", "asc"))
        mc = _first_present(result, ("mc", "MC"))

    angles = Angles(asc=angle_or_none(asc), mc=angle_or_none(mc))
    return _decode_cusps(raw_cusps), angles


def _first_present(result: Any, names) -> Any:
    for name in names:
        value = _field(result, name)
        if value is not _MISSING and value is not None:
            return value
    return None


def _decode_cusps(raw: Any) -> Optional[HouseCusps]:
    if not _is_sequence(raw):
        return None

    values = list(raw)
    # Older pyswisseph builds return 13 slots with index 0 unused.
    if len(values) == 13:
        values = values[1:]
    if len(values) != 12 or not all(is_finite_number(v) for v in values):
        return None

    return HouseCusps(cusps=[to_angle(v) for v in values])


def house_of(degree: float, cusps: List[float]) -> int:
    """
    House (1-12) whose half-open interval [cusp[i], cusp[i+1]) holds `degree`.
    Intervals wrap through 0° when cusp[i] > cusp[i+1].
    """
    for i in range(12):
        start = cusps[i]
        end = cusps[(i + 1) % 12]
        if start <= end:
            in_house = start <= degree < end
        else:
            in_house = degree >= start or degree < end
        if in_house:
            return i + 1
    return 12


def assign_houses(
    planets: List[CelestialBody],
    cusps: Optional[List[float]],
) -> List[CelestialBody]:
    """
    Return copies of `planets` with their house numbers filled in.

    Needs exactly 12 cusps; otherwise planets come back unchanged.
    """
    if cusps is None or len(cusps) != 12:
        return list(planets)

    assigned = []
    for planet in planets:
        if planet.degree is None or not is_finite_number(planet.degree):
            assigned.append(planet)
            continue
        assigned.append(
            planet.model_copy(update={"house": house_of(planet.degree, cusps)})
        )
    return assigned


def angle_or_none(value: Any) -> Optional[Angle]:
    return to_angle(value) if is_finite_number(value) else None
