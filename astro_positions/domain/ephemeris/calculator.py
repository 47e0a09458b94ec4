import logging
from typing import Iterable, List, Optional, Tuple

from astro_positions.domain.ephemeris.errors import (
    HousesUnavailableError,
    ProviderCalculationError,
)
from astro_positions.domain.ephemeris.normalizer import (
    assign_houses,
    build_body,
    decode_houses,
)
from astro_positions.domain.ephemeris.provider import BODIES, EphemerisProvider
from astro_positions.domain.ephemeris.schemas import (
    Angles,
    CelestialBody,
    Chart,
    HouseCusps,
    PositionQuery,
)
from astro_positions.domain.ephemeris.zodiac import local_to_ut, to_julian_day

logger = logging.getLogger(__name__)


# 1992-09-08 12:00 UT, used by the sample and houses-only routes.
SAMPLE_MOMENT = (1992, 9, 8, 12.0)


class ChartCalculator:
    """
    Turns a validated query into a Chart.

    This class:
    - Computes the Julian Day (never via the provider)
    - Calls the provider once per body and once for houses
    - Degrades single bodies instead of failing the whole chart
    """

    def __init__(self, provider: EphemerisProvider):
        self.provider = provider

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def julian_day(self, query: PositionQuery) -> float:
        ut_hours = local_to_ut(query.local_hours, query.tz_offset_minutes)
        return to_julian_day(
            query.date.year, query.date.month, query.date.day, ut_hours
        )

    def calculate(self, query: PositionQuery) -> Tuple[float, Chart]:
        """
        Full chart: planets in fixed order, then houses and angles if the
        provider can compute them.
        """
        jd_ut = self.julian_day(query)
        planets = self.calculate_bodies(jd_ut, BODIES)

        warnings: List[str] = []
        try:
            houses, angles = self.calculate_houses(
                jd_ut, query.latitude, query.longitude, query.house_system
            )
        except HousesUnavailableError as e:
            logger.warning("Houses unavailable for JD %s: %s", jd_ut, e)
            warnings.append(f"houses unavailable: {e}")
            return jd_ut, Chart(planets=planets, warnings=warnings)

        if houses is None:
            warnings.append("houses unavailable: provider returned no usable cusps")
        else:
            planets = assign_houses(planets, houses.degrees())

        return jd_ut, Chart(
            planets=planets,
            houses=houses,
            angles=angles,
            warnings=warnings,
        )

    def calculate_bodies(
        self, jd_ut: float, names: Iterable[str]
    ) -> List[CelestialBody]:
        return [self._body(jd_ut, name) for name in names]

    def calculate_houses(
        self,
        jd_ut: float,
        latitude: float,
        longitude: float,
        house_system: str,
    ) -> Tuple[Optional[HouseCusps], Angles]:
        """
        Raises HousesUnavailableError when the provider cannot compute houses.
        """
        try:
            result = self.provider.houses(jd_ut, latitude, longitude, house_system)
        except ProviderCalculationError as e:
            raise HousesUnavailableError(str(e)) from e
        return decode_houses(result)

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    def _body(self, jd_ut: float, name: str) -> CelestialBody:
        try:
            result = self.provider.calc(jd_ut, name)
        except ProviderCalculationError as e:
            logger.warning("Position unavailable for %s at JD %s: %s", name, jd_ut, e)
            result = None

        body = build_body(name, result)
        if body.degree is None and result is not None:
            logger.warning("Could not decode %s result: %r", name, result)
        return body
