import unittest
from mowplan.planning.geo_projector import GeoProjector, ScaleModel
from mowplan.utilities.geometry_utils import is_clockwise, local_meters, map_polygon, ring_area_m2
from mowing_fixtures import square_corners


class TestGeometryUtils(unittest.TestCase):
    def test_map_polygon_puts_longitude_on_x(self):
        poly = map_polygon([(10.0, 20.0), (11.0, 20.0), (11.0, 21.0)])
        self.assertEqual(poly.bounds, (20.0, 10.0, 21.0, 11.0))

    def test_is_clockwise(self):
        corners = square_corners()
        self.assertTrue(is_clockwise(corners), "North-east-south-west square should be clockwise")
        self.assertFalse(is_clockwise(corners[::-1]), "Reversed square should be counter-clockwise")

    def test_ring_area_m2(self):
        area = ring_area_m2(square_corners(100.0), GeoProjector().scale_model(40.0))
        self.assertAlmostEqual(area, 10000.0, delta=0.5)

    def test_degenerate_ring_has_no_area(self):
        model = ScaleModel(0.0, 100000.0, 100000.0)
        self.assertEqual(ring_area_m2([(0.0, 0.0), (1.0, 1.0)], model), 0.0)

    def test_local_meters_origin_is_first_point(self):
        model = ScaleModel(0.0, 100000.0, 50000.0)
        self.assertEqual(local_meters([(1.0, 2.0), (1.5, 3.0)], model), [(0.0, 0.0), (50000.0, 50000.0)])


if __name__ == '__main__':
    unittest.main()
