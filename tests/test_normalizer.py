import math
import unittest
from types import SimpleNamespace

from astro_positions.domain.ephemeris.normalizer import (
    assign_houses,
    build_body,
    decode_houses,
    extract_longitude,
    extract_retrograde,
    extract_speed,
    house_of,
)
from astro_positions.domain.ephemeris.schemas import CelestialBody

EQUAL_CUSPS = [float(i * 30) for i in range(12)]


class TestExtractLongitude(unittest.TestCase):
    def test_plain_number(self):
        self.assertEqual(extract_longitude(123.5), 123.5)
        self.assertEqual(extract_longitude(7), 7.0)

    def test_flat_sequence(self):
        self.assertEqual(extract_longitude([45.0, 1.2, 0.98]), 45.0)

    def test_swisseph_pair(self):
        self.assertEqual(extract_longitude(((166.2, 0.0, 1.0, 0.98), 2)), 166.2)

    def test_data_vector(self):
        self.assertEqual(extract_longitude({"flag": 2, "error": "", "data": [10.5, 0, 1]}), 10.5)

    def test_named_fields(self):
        self.assertEqual(extract_longitude({"longitude": 200.0}), 200.0)
        self.assertEqual(extract_longitude({"lon": 201.0}), 201.0)
        self.assertEqual(extract_longitude(SimpleNamespace(longitude=202.0)), 202.0)

    def test_priority_data_before_longitude(self):
        self.assertEqual(extract_longitude({"data": [1.0], "longitude": 2.0, "lon": 3.0}), 1.0)
        self.assertEqual(extract_longitude({"data": [float("nan")], "longitude": 2.0}), 2.0)
        self.assertEqual(extract_longitude({"longitude": None, "lon": 3.0}), 3.0)

    def test_absent_values(self):
        for result in (None, {}, float("nan"), float("inf"), [], [None], "12.5", True,
                       {"data": []}, {"longitude": "abc"}, ((), 2)):
            self.assertIsNone(extract_longitude(result), result)


class TestSpeedAndRetrograde(unittest.TestCase):
    def test_speed_shapes(self):
        self.assertEqual(extract_speed(((1.0, 0.0, 1.0, -0.25), 2)), -0.25)
        self.assertEqual(extract_speed([1.0, 0.0, 1.0, 0.5]), 0.5)
        self.assertEqual(extract_speed({"data": [1.0, 0.0, 1.0, -1.5]}), -1.5)
        self.assertEqual(extract_speed({"longitudeSpeed": -0.1}), -0.1)
        self.assertEqual(extract_speed({"speed": 0.3}), 0.3)
        self.assertIsNone(extract_speed(42.0))
        self.assertIsNone(extract_speed({"longitude": 42.0}))

    def test_explicit_flag_wins(self):
        self.assertTrue(extract_retrograde({"longitude": 1.0, "retrograde": True, "speed": 1.0}))
        self.assertFalse(extract_retrograde({"longitude": 1.0, "retro": False, "speed": -1.0}))

    def test_negative_speed(self):
        self.assertTrue(extract_retrograde(((10.0, 0.0, 1.0, -0.02), 2)))
        self.assertFalse(extract_retrograde(((10.0, 0.0, 1.0, 0.02), 2)))

    def test_default_false(self):
        self.assertFalse(extract_retrograde(None))
        self.assertFalse(extract_retrograde(10.0))
        self.assertFalse(extract_retrograde({"lon": 10.0}))


class TestBuildBody(unittest.TestCase):
    def test_normalizes_degree_and_sign(self):
        body = build_body("Mars", ((-30.0, 0.0, 1.0, -0.3), 2))
        self.assertEqual(body.degree, 330.0)
        self.assertEqual(body.sign, "Pisces")
        self.assertTrue(body.retrograde)
        self.assertIsNone(body.house)

    def test_unknown_on_bad_data(self):
        for result in (None, {}, float("nan")):
            body = build_body("Venus", result)
            self.assertIsNone(body.degree)
            self.assertEqual(body.sign, "Unknown")


class TestHouseOf(unittest.TestCase):
    def test_equal_cusps(self):
        self.assertEqual(house_of(5.0, EQUAL_CUSPS), 1)
        self.assertEqual(house_of(355.0, EQUAL_CUSPS), 12)
        self.assertEqual(house_of(30.0, EQUAL_CUSPS), 2)

    def test_start_inclusive_end_exclusive(self):
        self.assertEqual(house_of(0.0, EQUAL_CUSPS), 1)
        self.assertEqual(house_of(29.999999, EQUAL_CUSPS), 1)
        self.assertEqual(house_of(330.0, EQUAL_CUSPS), 12)

    def test_wrapping_interval(self):
        # cusp[11] = 350, cusp[0] = 20: house 12 spans 350..20 through 0°
        cusps = [20.0 + i * 30 for i in range(11)] + [350.0]
        self.assertEqual(house_of(5.0, cusps), 12)
        self.assertEqual(house_of(355.0, cusps), 12)
        self.assertEqual(house_of(20.0, cusps), 1)
        self.assertEqual(house_of(349.9, cusps), 11)

    def test_wrap_inside_first_house(self):
        cusps = [345.0] + [15.0 + i * 30 for i in range(11)]
        self.assertEqual(house_of(350.0, cusps), 1)
        self.assertEqual(house_of(10.0, cusps), 1)
        self.assertEqual(house_of(15.0, cusps), 2)

    def test_degenerate_cusps_fall_back_to_twelve(self):
        self.assertEqual(house_of(100.0, [0.0] * 12), 12)


class TestAssignHouses(unittest.TestCase):
    def setUp(self):
        self.planets = [
            CelestialBody(name="Sun", degree=355.0, sign="Pisces"),
            CelestialBody(name="Moon", degree=5.0, sign="Aries"),
            CelestialBody(name="Mars", degree=None),
        ]

    def test_assigns_copies(self):
        assigned = assign_houses(self.planets, EQUAL_CUSPS)
        self.assertEqual([p.house for p in assigned], [12, 1, None])
        # originals untouched
        self.assertIsNone(self.planets[0].house)

    def test_requires_twelve_cusps(self):
        assigned = assign_houses(self.planets, EQUAL_CUSPS[:11])
        self.assertEqual([p.house for p in assigned], [None, None, None])
        self.assertEqual(assign_houses(self.planets, None), self.planets)


class TestDecodeHouses(unittest.TestCase):
    def test_swisseph_pair(self):
        ascmc = (95.0, 3.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        houses, angles = decode_houses((tuple(EQUAL_CUSPS), ascmc))
        self.assertEqual(houses.degrees(), EQUAL_CUSPS)
        self.assertEqual(angles.asc.degree, 95.0)
        self.assertEqual(angles.asc.sign, "Cancer")
        self.assertEqual(angles.mc.sign, "Aries")

    def test_thirteen_slot_cusps(self):
        houses, _ = decode_houses(([0.0] + EQUAL_CUSPS, (1.0, 2.0)))
        self.assertEqual(houses.degrees(), EQUAL_CUSPS)

    def test_cusps_asc_mc_triple(self):
        houses, angles = decode_houses((EQUAL_CUSPS, 370.0, -10.0))
        self.assertEqual(len(houses.cusps), 12)
        self.assertEqual(angles.asc.degree, 10.0)
        self.assertEqual(angles.mc.degree, 350.0)

    def test_mapping_shapes(self):
        houses, angles = decode_houses({"houseCusps": EQUAL_CUSPS, "ascendant": 1.0, "mc": 2.0})
        self.assertEqual(len(houses.cusps), 12)
        self.assertEqual(angles.asc.degree, 1.0)

        houses, angles = decode_houses({"cusps": EQUAL_CUSPS, "asc": 3.0, "MC": 4.0})
        self.assertEqual(angles.mc.degree, 4.0)

    def test_cusps_normalized(self):
        houses, _ = decode_houses(([c - 360.0 for c in EQUAL_CUSPS], ()))
        self.assertEqual(houses.degrees(), EQUAL_CUSPS)

    def test_wrong_count_is_absent(self):
        houses, angles = decode_houses((EQUAL_CUSPS[:10], (1.0, 2.0)))
        self.assertIsNone(houses)
        self.assertEqual(angles.asc.degree, 1.0)

    def test_garbage(self):
        for result in (None, {}, 5.0, [], ([math.nan] * 12, ())):
            houses, angles = decode_houses(result)
            self.assertIsNone(houses)
            self.assertIsNone(angles.asc)
            self.assertIsNone(angles.mc)


if __name__ == "__main__":
    unittest.main()
