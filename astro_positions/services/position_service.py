import datetime as dt
from typing import Any, Dict, Optional

from astro_positions.domain.ephemeris.calculator import SAMPLE_MOMENT, ChartCalculator
from astro_positions.domain.ephemeris.provider import EphemerisProvider
from astro_positions.domain.ephemeris.schemas import Chart, PositionQuery
from astro_positions.domain.ephemeris.zodiac import to_julian_day


class PositionService:
    """
    Service wrapper around the chart calculator.

    Used by:
    - positions, houses and sample routes
    """

    def __init__(self, provider: EphemerisProvider):
        self.provider = provider
        self.calculator = ChartCalculator(provider)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def get_positions(self, query: PositionQuery) -> Dict[str, Any]:
        """
        Planets, houses and angles for a validated query.
        """
        jd_ut, chart = self.calculator.calculate(query)

        out: Dict[str, Any] = {
            "success": True,
            "jd_ut": jd_ut,
            "input": query.to_dict(),
        }
        out.update(chart_to_dict(chart))
        return out

    def get_houses(
        self,
        *,
        latitude: float,
        longitude: float,
        house_system: str,
        query: Optional[PositionQuery] = None,
    ) -> Dict[str, Any]:
        """
        Houses and angles only. Without a query the sample moment is used.

        Raises HousesUnavailableError.
        """
        if query is not None:
            jd_ut = self.calculator.julian_day(query)
        else:
            jd_ut = to_julian_day(*SAMPLE_MOMENT)

        houses, angles = self.calculator.calculate_houses(
            jd_ut, latitude, longitude, house_system
        )
        return {
            "success": True,
            "jd_ut": jd_ut,
            "input": {"lat": latitude, "lng": longitude, "hsys": house_system},
            "houses": houses.to_dict() if houses else None,
            "angles": angles.to_dict(),
        }

    def get_sample(self) -> Dict[str, Any]:
        """
        Sun and Moon at the fixed sample moment, no houses.
        """
        jd_ut = to_julian_day(*SAMPLE_MOMENT)
        sun, moon = self.calculator.calculate_bodies(jd_ut, ("Sun", "Moon"))
        year, month, day, hours = SAMPLE_MOMENT
        moment = dt.datetime(year, month, day, int(hours), tzinfo=dt.timezone.utc)
        return {
            "success": True,
            "jd_ut": jd_ut,
            "moment": moment.isoformat(),
            "sun": {"degree": sun.degree, "sign": sun.sign},
            "moon": {"degree": moon.degree, "sign": moon.sign},
        }


def chart_to_dict(chart: Chart) -> Dict[str, Any]:
    out: Dict[str, Any] = {"planets": [p.to_dict() for p in chart.planets]}
    if chart.houses is not None:
        out["houses"] = chart.houses.to_dict()
    if chart.angles is not None:
        out["angles"] = chart.angles.to_dict()
    if chart.warnings:
        out["warnings"] = list(chart.warnings)
    return out

