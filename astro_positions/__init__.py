"""
Astro Positions
===============
Planet positions, house cusps and angles from the Swiss Ephemeris, plus a
keyword-routed chart chat.

Quick start:
    from astro_positions.domain.ephemeris import ChartCalculator
    from astro_positions.domain.ephemeris.provider import SwissEphemerisProvider
"""

__version__ = "1.0.0"
