from unittest import TestCase

import pandas as pd
from shapely.geometry import Polygon

from digipin import encode
from digipin.batch import decode_codes, encode_dataframe, encode_points
from digipin.constructs.points import Points
from digipin.utils.crs import LATLON_CRS
from digipin.utils.exceptions import InvalidSymbolError, OutOfRangeError
from tests import get_test_dir


class TestBatch(TestCase):
    def setUp(self):
        self.points = Points.from_csv(
            get_test_dir() / "test_assets" / "sample_points.csv"
        )
        self.df = pd.DataFrame(
            {
                "lat": [18.968557, 51.5072, 26.9124],
                "lng": [72.822191, -0.1276, 75.7873],
            }
        )

    def test_encode_points(self):
        result = encode_points(self.points)

        self.assertEqual(len(result), 5)
        self.assertEqual(result.failed, [])
        self.assertEqual(result.codes[0], encode(28.6139, 77.2090))

        for pin in result.pins:
            self.assertTrue(pin.cell.contains(pin.coordinate.y, pin.coordinate.x))

    def test_encode_points_raise(self):
        points = Points.from_dataframe(self.df, "lat", "lng")

        with self.assertRaises(OutOfRangeError):
            encode_points(points)

    def test_encode_points_coerce(self):
        points = Points.from_dataframe(self.df, "lat", "lng")

        with self.assertLogs("digipin.batch", level="WARNING"):
            result = encode_points(points, errors="coerce")

        self.assertEqual(len(result), 3)
        self.assertEqual(len(result.failed), 1)
        self.assertEqual(result.codes[0], "4FK-5MK-9PPK")
        self.assertIsNone(result.codes[1])
        self.assertIsNone(result.pins[1].cell)

    def test_invalid_errors_mode(self):
        with self.assertRaises(ValueError):
            encode_points(self.points, errors="ignore")
        with self.assertRaises(ValueError):
            decode_codes(["4FK-5MK-9PPK"], errors="ignore")

    def test_to_dataframe(self):
        points = Points.from_dataframe(self.df, "lat", "lng")
        df = encode_points(points, errors="coerce").to_dataframe()

        self.assertEqual(
            list(df.columns),
            [
                "coordinate_id",
                "digipin",
                "latitude",
                "longitude",
                "min_lat",
                "max_lat",
                "min_lon",
                "max_lon",
            ],
        )
        self.assertEqual(df["digipin"].iloc[0], "4FK-5MK-9PPK")
        self.assertTrue(pd.isna(df["digipin"].iloc[1]))
        self.assertTrue(pd.isna(df["min_lat"].iloc[1]))
        self.assertAlmostEqual(df["latitude"].iloc[1], 51.5072)

    def test_to_geodataframe_cells(self):
        gdf = encode_points(self.points).to_geodataframe()

        self.assertEqual(gdf.crs, LATLON_CRS)
        self.assertEqual(len(gdf), 5)
        self.assertIsInstance(gdf.geometry.iloc[0], Polygon)
        self.assertTrue(gdf.geometry.iloc[0].contains(self.points.coords[0].geom))

    def test_to_geodataframe_points(self):
        gdf = encode_points(self.points).to_geodataframe(geometry="point")

        self.assertAlmostEqual(gdf.geometry.iloc[0].y, 28.6139)

    def test_to_geodataframe_invalid_geometry(self):
        with self.assertRaises(ValueError):
            encode_points(self.points).to_geodataframe(geometry="line")

    def test_decode_codes(self):
        result = decode_codes(["4FK-5MK-9PPK", "4FK5MK9PPK"])

        self.assertEqual(len(result), 2)
        first, second = result.pins
        self.assertEqual(first.coordinate.coordinate_id, "4FK-5MK-9PPK")
        self.assertAlmostEqual(first.coordinate.y, 18.968557, delta=1e-6)
        self.assertEqual(first.coordinate.geom, second.coordinate.geom)
        self.assertEqual(second.coordinate.coordinate_id, "4FK5MK9PPK")
        self.assertEqual(result.codes, ["4FK-5MK-9PPK", "4FK-5MK-9PPK"])

    def test_decode_codes_raise(self):
        with self.assertRaises(InvalidSymbolError):
            decode_codes(["4FK-5MK-9PPK", "XFK-5MK-9PPK"])

    def test_decode_codes_coerce(self):
        with self.assertLogs("digipin.batch", level="WARNING"):
            result = decode_codes(["4FK-5MK-9PPK", "XFK-5MK-9PPK", "4FK"], errors="coerce")

        self.assertEqual(len(result.failed), 2)

        df = result.to_dataframe()
        self.assertEqual(df["coordinate_id"].tolist(), ["4FK-5MK-9PPK", "XFK-5MK-9PPK", "4FK"])
        self.assertTrue(pd.isna(df["latitude"].iloc[1]))

    def test_decode_codes_non_string(self):
        codes = pd.Series(["4FK-5MK-9PPK", None, float("nan")])

        with self.assertRaises(TypeError):
            decode_codes(codes)

        with self.assertLogs("digipin.batch", level="WARNING"):
            result = decode_codes(codes, errors="coerce")

        self.assertEqual(result.codes, ["4FK-5MK-9PPK", None, None])
        self.assertTrue(result.pins[2].coordinate.geom.is_empty)

    def test_encode_dataframe(self):
        out = encode_dataframe(self.df, "lat", "lng", errors="coerce")

        self.assertNotIn("digipin", self.df.columns)
        self.assertEqual(out["digipin"].iloc[0], "4FK-5MK-9PPK")
        self.assertEqual(out["digipin"].dtype, object)
        self.assertIsNone(out["digipin"].iloc[1])
        self.assertEqual(out["digipin"].iloc[2], encode(26.9124, 75.7873))

    def test_encode_dataframe_custom_column(self):
        df = self.df.drop(index=1)

        out = encode_dataframe(df, "lat", "lng", code_column="pin")

        self.assertEqual(list(out.columns), ["lat", "lng", "pin"])
        self.assertEqual(list(out.index), [0, 2])

    def test_encode_dataframe_duplicate_index(self):
        df = pd.concat([self.df.drop(index=1), self.df.drop(index=1)])

        out = encode_dataframe(df, "lat", "lng")

        self.assertEqual(list(out.index), [0, 2, 0, 2])
        self.assertEqual(
            out["digipin"].tolist(),
            ["4FK-5MK-9PPK", encode(26.9124, 75.7873)] * 2,
        )
