import datetime as dt
import unittest

from astro_positions.domain.ephemeris.calculator import ChartCalculator
from astro_positions.domain.ephemeris.errors import HousesUnavailableError
from astro_positions.domain.ephemeris.provider import BODIES
from astro_positions.domain.ephemeris.schemas import PositionQuery

from provider_stubs import StubProvider


def make_query(**overrides):
    values = dict(
        date=dt.date(1992, 9, 8),
        time=dt.time(12, 0),
        latitude=-34.9285,
        longitude=138.6007,
        house_system="P",
        tz_offset_minutes=0,
    )
    values.update(overrides)
    return PositionQuery(**values)


class TestChartCalculator(unittest.TestCase):
    def test_julian_day_applies_offset(self):
        calc = ChartCalculator(StubProvider())
        self.assertEqual(calc.julian_day(make_query()), 2448874.0)
        # 21:30 local at +09:30 is 12:00 UT
        shifted = make_query(time=dt.time(21, 30), tz_offset_minutes=570)
        self.assertEqual(calc.julian_day(shifted), 2448874.0)

    def test_planets_in_fixed_order_with_houses(self):
        provider = StubProvider()
        jd_ut, chart = ChartCalculator(provider).calculate(make_query())

        self.assertEqual(jd_ut, 2448874.0)
        self.assertEqual([p.name for p in chart.planets], list(BODIES))
        sun = chart.body("Sun")
        self.assertEqual(sun.degree, 166.25)
        self.assertEqual(sun.sign, "Virgo")
        self.assertEqual(sun.house, 6)
        self.assertEqual(chart.body("Saturn").house, 11)
        self.assertEqual(len(chart.houses.cusps), 12)
        self.assertEqual(chart.angles.asc.sign, "Aries")
        self.assertEqual(chart.angles.mc.sign, "Capricorn")
        self.assertEqual(chart.warnings, [])

        calc_calls = [c for c in provider.calls if c[0] == "calc"]
        house_calls = [c for c in provider.calls if c[0] == "houses"]
        self.assertEqual(len(calc_calls), 10)
        self.assertEqual(house_calls, [("houses", 2448874.0, -34.9285, 138.6007, "P")])

    def test_retrograde_from_speed(self):
        provider = StubProvider(speeds={"Mercury": -0.4})
        _, chart = ChartCalculator(provider).calculate(make_query())
        self.assertTrue(chart.body("Mercury").retrograde)
        self.assertFalse(chart.body("Venus").retrograde)

    def test_failed_body_is_degraded(self):
        provider = StubProvider(failing={"Pluto"}, raw={"Neptune": {"data": []}})
        _, chart = ChartCalculator(provider).calculate(make_query())

        pluto = chart.body("Pluto")
        self.assertIsNone(pluto.degree)
        self.assertEqual(pluto.sign, "Unknown")
        self.assertIsNone(pluto.house)
        self.assertEqual(chart.body("Neptune").sign, "Unknown")
        self.assertEqual(chart.body("Sun").sign, "Virgo")
        self.assertEqual(len(chart.planets), 10)

    def test_houses_unavailable_keeps_planets(self):
        provider = StubProvider(houses_available=False)
        _, chart = ChartCalculator(provider).calculate(make_query())

        self.assertEqual(len(chart.planets), 10)
        self.assertIsNone(chart.houses)
        self.assertIsNone(chart.angles)
        self.assertTrue(all(p.house is None for p in chart.planets))
        self.assertEqual(chart.warnings, ["houses unavailable: no data path"])

    def test_unusable_cusps_skip_house_assignment(self):
        provider = StubProvider(cusps=(0.0, 30.0, 60.0))
        _, chart = ChartCalculator(provider).calculate(make_query())

        self.assertIsNone(chart.houses)
        self.assertTrue(all(p.house is None for p in chart.planets))
        self.assertEqual(chart.angles.asc.degree, 12.5)
        self.assertEqual(len(chart.warnings), 1)

    def test_calculate_houses_raises_when_unavailable(self):
        calc = ChartCalculator(StubProvider(houses_available=False))
        with self.assertRaises(HousesUnavailableError):
            calc.calculate_houses(2448874.0, 0.0, 0.0, "P")


if __name__ == "__main__":
    unittest.main()
