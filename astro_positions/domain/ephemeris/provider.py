import logging
import os
from typing import Any, Dict, Optional, Tuple

import swisseph as swe

from astro_positions.domain.ephemeris.errors import (
    HousesUnavailableError,
    ProviderCalculationError,
    ProviderConfigurationError,
)
from astro_positions.domain.ephemeris.normalizer import extract_longitude

logger = logging.getLogger(__name__)


# Output order of every chart.
BODIES: Tuple[str, ...] = (
    "Sun", "Moon", "Mercury", "Venus", "Mars",
    "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto",
)

# J2000.0; the Sun sits near 280° ecliptic longitude.
SELF_CHECK_JD = 2451545.0


class EphemerisProvider:
    """
    Interface the chart calculator talks to.

    `calc` and `houses` return the provider's raw result; decoding
    happens in the normalizer.
    """

    name = "abstract"
    version: Optional[str] = None
    houses_available = False
    houses_unavailable_reason: Optional[str] = None

    def calc(self, jd_ut: float, body: str) -> Any:
        raise NotImplementedError

    def houses(
        self, jd_ut: float, latitude: float, longitude: float, house_system: str
    ) -> Any:
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        return {
            "provider": self.name,
            "version": self.version,
            "houses_available": self.houses_available,
            "houses_unavailable_reason": self.houses_unavailable_reason,
        }


class SwissEphemerisProvider(EphemerisProvider):
    """
    pyswisseph adapter.

    Body identifiers and flags are resolved once here; a missing constant
    means the installed build is incompatible and construction fails.
    """

    name = "swisseph"

    BODY_CONSTANTS = {
        "Sun": "SUN",
        "Moon": "MOON",
        "Mercury": "MERCURY",
        "Venus": "VENUS",
        "Mars": "MARS",
        "Jupiter": "JUPITER",
        "Saturn": "SATURN",
        "Uranus": "URANUS",
        "Neptune": "NEPTUNE",
        "Pluto": "PLUTO",
    }

    def __init__(self, ephe_path: Optional[str] = None):
        self.ephe_path = ephe_path or None
        self.version = getattr(swe, "version", None)
        self.body_ids = self._resolve_bodies()
        # FLG_SPEED fills xx[3] so retrograde can be derived
        self.flags = self._resolve_constant("FLG_SWIEPH") | self._resolve_constant("FLG_SPEED")
        self._houses_ex = getattr(swe, "houses_ex", None)
        self._initialize_data_path()

    # ─────────────────────────────────────────────
    # Initialization
    # ─────────────────────────────────────────────

    def _resolve_constant(self, attr: str) -> int:
        value = getattr(swe, attr, None)
        if value is None:
            raise ProviderConfigurationError(
                f"swisseph build is missing constant {attr}"
            )
        return value

    def _resolve_bodies(self) -> Dict[str, int]:
        return {
            name: self._resolve_constant(attr)
            for name, attr in self.BODY_CONSTANTS.items()
        }

    def _initialize_data_path(self) -> None:
        if not callable(self._houses_ex):
            self._mark_houses_unavailable("houses_ex not available on this swisseph build")
            return

        if not self.ephe_path:
            self._mark_houses_unavailable("ephemeris data path is not configured")
            return

        if not os.path.isdir(self.ephe_path):
            self._mark_houses_unavailable(
                f"ephemeris data path {self.ephe_path!r} is unreachable"
            )
            return

        swe.set_ephe_path(self.ephe_path)
        self.houses_available = True
        self.houses_unavailable_reason = None
        logger.info("Swiss Ephemeris data path set to %s", self.ephe_path)

    def _mark_houses_unavailable(self, reason: str) -> None:
        self.houses_available = False
        self.houses_unavailable_reason = reason
        logger.warning("House computation disabled: %s", reason)

    def self_check(self) -> None:
        """
        Decode one known result; an undecodable shape is a startup failure.
        """
        result = self.calc(SELF_CHECK_JD, "Sun")
        longitude = extract_longitude(result)
        if longitude is None:
            raise ProviderConfigurationError(
                f"cannot decode swisseph calc_ut result: {result!r}"
            )
        logger.info(
            "Swiss Ephemeris %s self-check ok: Sun at %.2f° for JD %.1f",
            self.version, longitude, SELF_CHECK_JD,
        )

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calc(self, jd_ut: float, body: str) -> Any:
        try:
            body_id = self.body_ids[body]
        except KeyError:
            raise ProviderCalculationError(f"unknown body {body!r}") from None

        try:
            return swe.calc_ut(jd_ut, body_id, self.flags)
        except swe.Error as e:
            raise ProviderCalculationError(f"{body}: {e}") from e

    def houses(
        self, jd_ut: float, latitude: float, longitude: float, house_system: str
    ) -> Any:
        if not self.houses_available:
            raise HousesUnavailableError(self.houses_unavailable_reason)

        try:
            return self._houses_ex(
                jd_ut, latitude, longitude, house_system.encode("ascii")
            )
        except swe.Error as e:
            raise ProviderCalculationError(f"houses: {e}") from e

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info.update(
            {
                "ephe_path": self.ephe_path,
                "flags": self.flags,
                "bodies": dict(self.body_ids),
                "self_check_jd": SELF_CHECK_JD,
            }
        )
        return info
