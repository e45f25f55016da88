import unittest
from mowplan.errors import GeometryEngineError, InvalidDirectionError
from mowplan.planning.geo_projector import GeoProjector, ScaleModel
from mowplan.planning.quantizer import FixedPointQuantizer, WindingDirection, round_half_away


class TestWindingDirection(unittest.TestCase):
    def test_tokens_are_case_insensitive(self):
        self.assertIs(WindingDirection.from_token("cw"), WindingDirection.CW)
        self.assertIs(WindingDirection.from_token("Ccw"), WindingDirection.CCW)
        self.assertIs(WindingDirection.from_token("CCW"), WindingDirection.CCW)

    def test_unknown_token(self):
        for token in ("", "clockwise", "C W", "up"):
            with self.assertRaises(InvalidDirectionError):
                WindingDirection.from_token(token)

    def test_values(self):
        self.assertEqual(WindingDirection.CW.value, 1)
        self.assertEqual(WindingDirection.CCW.value, -1)


class TestRounding(unittest.TestCase):
    def test_rounds_half_away_from_zero(self):
        self.assertEqual(round_half_away([2.5, -2.5, 0.4, -0.6]).tolist(), [3, -3, 0, -1])

    def test_rejects_out_of_range(self):
        with self.assertRaises(GeometryEngineError):
            round_half_away(1e19)
        with self.assertRaises(GeometryEngineError):
            round_half_away(float('nan'))


class TestFixedPointQuantizer(unittest.TestCase):
    def setUp(self):
        self.model = GeoProjector().scale_model(40.0)

    def test_round_trip(self):
        for direction in WindingDirection:
            quantizer = FixedPointQuantizer(self.model, direction)
            for lat, lon in [(40.0, -105.0), (40.00123456, -105.98765432), (-33.8688197, 151.2092955),
                             (0.0, 0.0), (69.99999999, 179.99999999)]:
                x, y = quantizer.quantize(lat, lon)
                lat2, lon2 = quantizer.dequantize(x, y)
                self.assertAlmostEqual(lat2, lat, delta=1e-7)
                self.assertAlmostEqual(lon2, lon, delta=1e-7)

    def test_returns_integers(self):
        x, y = FixedPointQuantizer(self.model, WindingDirection.CW).quantize(40.5, -105.25)
        self.assertIsInstance(x, int)
        self.assertIsInstance(y, int)
        self.assertEqual(x, 4050000000)

    def test_direction_mirrors_longitude_axis(self):
        cw = FixedPointQuantizer(self.model, WindingDirection.CW)
        ccw = FixedPointQuantizer(self.model, WindingDirection.CCW)
        self.assertEqual(cw.quantize_lat(40.1), ccw.quantize_lat(40.1))
        self.assertEqual(cw.quantize_lon(-105.1), -ccw.quantize_lon(-105.1))

    def test_longitude_is_stretched_to_latitude_units(self):
        quantizer = FixedPointQuantizer(self.model, WindingDirection.CW)
        one_meter_lat = 1.0 / self.model.meters_per_deg_lat
        one_meter_lon = 1.0 / self.model.meters_per_deg_lon
        dx = quantizer.quantize_lat(40.0 + one_meter_lat) - quantizer.quantize_lat(40.0)
        dy = quantizer.quantize_lon(-105.0 + one_meter_lon) - quantizer.quantize_lon(-105.0)
        self.assertLessEqual(abs(dx - dy), 1)

    def test_quantize_path_matches_scalar(self):
        quantizer = FixedPointQuantizer(self.model, WindingDirection.CCW)
        points = [(40.0, -105.0), (40.001, -105.0), (40.001, -104.999)]
        self.assertEqual(quantizer.quantize_path(points), [quantizer.quantize(lat, lon) for lat, lon in points])

    def test_spacing_in_units(self):
        model = ScaleModel(0.0, 100000.0, 100000.0)
        quantizer = FixedPointQuantizer(model, WindingDirection.CW, scale=1e8)
        # 100 in = 2.54 m = 2.54e-5 deg
        self.assertEqual(quantizer.spacing_in_units(100), 2540)

    def test_scale_must_be_positive(self):
        with self.assertRaises(ValueError):
            FixedPointQuantizer(self.model, WindingDirection.CW, scale=-1e8)
        with self.assertRaises(ValueError):
            FixedPointQuantizer(self.model, WindingDirection.CW, scale=0)


if __name__ == '__main__':
    unittest.main()
