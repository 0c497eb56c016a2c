import json
from unittest import TestCase

import pandas as pd
from pyproj import Transformer
from shapely.ops import transform

from digipin.constructs.geofence import Geofence
from digipin.constructs.points import Points
from digipin.utils.crs import LATLON_CRS, XY_CRS
from tests import get_test_dir


class TestGeofence(TestCase):
    def test_from_bounds(self):
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)

        self.assertEqual(fence.crs, LATLON_CRS)
        self.assertEqual(fence.geometry.bounds, (72.6, 18.9, 72.7, 19.0))

    def test_from_bounds_invalid(self):
        with self.assertRaises(ValueError):
            Geofence.from_bounds(south=19.0, west=72.6, north=18.9, east=72.7)

    def test_from_geojson(self):
        fence = Geofence.from_geojson(get_test_dir() / "test_assets" / "sample_fence.geojson")

        self.assertEqual(fence.crs, LATLON_CRS)
        self.assertEqual(fence.geometry.bounds, (72.6, 18.9, 72.7, 19.0))

    def test_from_points(self):
        df = pd.DataFrame(
            {"latitude": [18.9430, 18.9480, 18.9530], "longitude": [72.8230, 72.8220, 72.8190]}
        )
        points = Points.from_dataframe(df)

        fence = Geofence.from_points(points, padding=500)

        self.assertEqual(fence.crs, LATLON_CRS)
        for coord in points.coords:
            self.assertTrue(fence.geometry.contains(coord.geom))

    def test_to_geojson(self):
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)

        geojson = json.loads(fence.to_geojson())

        self.assertEqual(geojson["type"], "Polygon")

    def test_covering_cells_single_cell(self):
        """A fence strictly inside one cell is covered by that cell alone"""
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)

        cells = fence.covering_cells(level=3)

        self.assertEqual([code for code, _ in cells], ["4FK"])

    def test_covering_cells_finer_level(self):
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)

        cells = fence.covering_cells(level=5)

        self.assertGreater(len(cells), 1)
        for code, cell in cells:
            self.assertTrue(code.startswith("4FK-"))
            self.assertEqual(len(code), 6)
            self.assertTrue(cell.to_polygon().intersects(fence.geometry))

        # every corner of the fence falls in one of the returned cells
        for lat, lon in [(18.9, 72.6), (18.9, 72.7), (19.0, 72.6), (19.0, 72.7)]:
            self.assertTrue(any(cell.contains(lat, lon) for _, cell in cells))

    def test_covering_cells_whole_area(self):
        fence = Geofence.from_bounds(south=2.5, west=63.5, north=38.5, east=99.5)

        self.assertEqual(len(fence.covering_cells(level=1)), 16)
        self.assertEqual(len(fence.covering_cells(level=2)), 256)

    def test_covering_cells_limit(self):
        fence = Geofence.from_bounds(south=2.5, west=63.5, north=38.5, east=99.5)

        with self.assertRaises(ValueError):
            fence.covering_cells(level=3, max_cells=100)

    def test_covering_cells_invalid_level(self):
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)

        with self.assertRaises(ValueError):
            fence.covering_cells(level=0)
        with self.assertRaises(ValueError):
            fence.covering_cells(level=11)

    def test_covering_cells_projected_fence(self):
        fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)
        project = Transformer.from_crs(LATLON_CRS, XY_CRS, always_xy=True).transform
        projected = Geofence(crs=XY_CRS, geometry=transform(project, fence.geometry))

        codes = [code for code, _ in projected.covering_cells(level=3)]

        self.assertEqual(codes, ["4FK"])
