import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


UNKNOWN_SIGN = "Unknown"


# ─────────────────────────────────────────────
# Core Atomic Schemas
# ─────────────────────────────────────────────

class Angle(BaseModel):
    """
    An ecliptic longitude reduced to [0, 360) with its zodiac sign.
    """
    model_config = ConfigDict(frozen=True)

    degree: float
    sign: str

    def to_dict(self) -> Dict[str, Any]:
        return {"degree": self.degree, "sign": self.sign}


class CelestialBody(BaseModel):
    """
    A single body's position in a chart.

    `degree` is None when the provider result could not be decoded;
    the sign is then "Unknown".
    """
    model_config = ConfigDict(frozen=True)

    name: str
    degree: Optional[float] = None
    sign: str = UNKNOWN_SIGN
    house: Optional[int] = Field(None, ge=1, le=12)
    retrograde: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "degree": self.degree,
            "sign": self.sign,
            "retrograde": self.retrograde,
        }
        if self.house is not None:
            out["house"] = self.house
        return out


class HouseCusps(BaseModel):
    """
    The twelve house cusps, index 0 being the first house.
    """
    model_config = ConfigDict(frozen=True)

    cusps: List[Angle]

    @field_validator("cusps")
    @classmethod
    def _exactly_twelve(cls, value: List[Angle]) -> List[Angle]:
        if len(value) != 12:
            raise ValueError(f"expected 12 house cusps, got {len(value)}")
        return value

    def degrees(self) -> List[float]:
        return [c.degree for c in self.cusps]

    def to_dict(self) -> Dict[str, Any]:
        return {"cusps": [c.to_dict() for c in self.cusps]}


class Angles(BaseModel):
    """
    Ascendant and Midheaven.
    """
    model_config = ConfigDict(frozen=True)

    asc: Optional[Angle] = None
    mc: Optional[Angle] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asc": self.asc.to_dict() if self.asc else None,
            "mc": self.mc.to_dict() if self.mc else None,
        }


# ─────────────────────────────────────────────
# Chart
# ─────────────────────────────────────────────

class Chart(BaseModel):
    """
    Planets plus, when the provider could compute them, houses and angles.
    """
    model_config = ConfigDict(frozen=True)

    planets: List[CelestialBody]
    houses: Optional[HouseCusps] = None
    angles: Optional[Angles] = None
    warnings: List[str] = Field(default_factory=list)

    def body(self, name: str) -> Optional[CelestialBody]:
        return next((p for p in self.planets if p.name == name), None)


# ─────────────────────────────────────────────
# Query
# ─────────────────────────────────────────────

class PositionQuery(BaseModel):
    """
    A validated position request. Local civil time plus a fixed UTC offset.
    """
    model_config = ConfigDict(frozen=True)

    date: dt.date
    time: dt.time
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    house_system: str = Field("P", min_length=1, max_length=1)
    tz_offset_minutes: int = Field(0, ge=-900, le=900)

    @property
    def local_hours(self) -> float:
        return self.time.hour + self.time.minute / 60.0 + self.time.second / 3600.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "time": self.time.isoformat(),
            "lat": self.latitude,
            "lng": self.longitude,
            "house_system": self.house_system,
            "tz_offset_minutes": self.tz_offset_minutes,
        }
