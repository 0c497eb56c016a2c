from unittest import TestCase

from digipin import LatLon, decode, encode, is_valid
from digipin.constructs.cell import Cell
from digipin.decoder import decode_cell
from digipin.utils.exceptions import (
    DigipinException,
    InvalidLengthError,
    InvalidSymbolError,
)


class TestDecode(TestCase):
    def test_known_code(self):
        center = decode("4FK-5MK-9PPK")

        self.assertIsInstance(center, LatLon)
        self.assertAlmostEqual(center.latitude, 18.968557, delta=1e-6)
        self.assertAlmostEqual(center.longitude, 72.822191, delta=1e-6)

    def test_returns_floats(self):
        center = decode("4FK-5MK-9PPK")

        self.assertIsInstance(center.latitude, float)
        self.assertIsInstance(center.longitude, float)
        self.assertEqual(
            center.to_dict(), {"latitude": center.latitude, "longitude": center.longitude}
        )

    def test_rounded_to_six_places(self):
        center = decode("39J-438-TJC7")

        self.assertEqual(center.latitude, round(center.latitude, 6))
        self.assertEqual(center.longitude, round(center.longitude, 6))

    def test_separators_are_optional(self):
        """Grouped, ungrouped and oddly grouped codes decode to the same point"""
        expected = decode("4FK-5MK-9PPK")

        self.assertEqual(decode("4FK5MK9PPK"), expected)
        self.assertEqual(decode("4F-K5MK9-PPK"), expected)
        self.assertEqual(decode("-4FK5MK9PPK-"), expected)

    def test_separator_invariance_for_many_codes(self):
        for lat, lon in [(2.5, 63.5), (38.5, 99.5), (25.5941, 85.1376), (8.5, 77.0)]:
            grouped = encode(lat, lon)

            self.assertEqual(decode(grouped), decode(grouped.replace("-", "")))

    def test_too_short(self):
        with self.assertRaises(InvalidLengthError) as ctx:
            decode("4FK-5MK")

        self.assertEqual(ctx.exception.actual, 6)
        self.assertEqual(ctx.exception.expected, 10)
        self.assertEqual(str(ctx.exception), "Invalid DIGIPIN length: 6, expected 10")

    def test_too_long(self):
        with self.assertRaises(InvalidLengthError) as ctx:
            decode("4FK-5MK-9PPK-XXX")

        self.assertEqual(ctx.exception.actual, 13)

    def test_empty(self):
        with self.assertRaises(InvalidLengthError) as ctx:
            decode("")

        self.assertEqual(ctx.exception.actual, 0)

    def test_length_checked_before_symbols(self):
        with self.assertRaises(InvalidLengthError):
            decode("XXX")

    def test_invalid_symbol(self):
        with self.assertRaises(InvalidSymbolError) as ctx:
            decode("XFK-5MK-9PPK")

        self.assertEqual(ctx.exception.symbol, "X")
        self.assertEqual(ctx.exception.index, 0)
        self.assertEqual(
            str(ctx.exception), "Invalid character 'X' at position 0 in DIGIPIN"
        )

    def test_invalid_symbol_index_ignores_separators(self):
        with self.assertRaises(InvalidSymbolError) as ctx:
            decode("4FK-ZMK-9PPK")

        self.assertEqual(ctx.exception.symbol, "Z")
        self.assertEqual(ctx.exception.index, 3)

    def test_codes_are_case_sensitive(self):
        with self.assertRaises(InvalidSymbolError) as ctx:
            decode("4fk-5mk-9ppk")

        self.assertEqual(ctx.exception.symbol, "f")
        self.assertEqual(ctx.exception.index, 1)

    def test_error_kinds_are_distinct(self):
        self.assertFalse(issubclass(InvalidLengthError, InvalidSymbolError))
        self.assertFalse(issubclass(InvalidSymbolError, InvalidLengthError))
        self.assertTrue(issubclass(InvalidLengthError, DigipinException))
        self.assertTrue(issubclass(InvalidSymbolError, DigipinException))


class TestDecodeCell(TestCase):
    def test_full_code_cell_contains_center(self):
        cell = decode_cell("4FK-5MK-9PPK")
        lat, lon = cell.center

        self.assertTrue(cell.contains(lat, lon))
        self.assertAlmostEqual(cell.max_lat - cell.min_lat, 36 / 4**10)
        self.assertAlmostEqual(cell.max_lon - cell.min_lon, 36 / 4**10)

    def test_partial_code(self):
        self.assertEqual(
            decode_cell("4FK", partial=True),
            Cell(min_lat=18.8125, max_lat=19.375, min_lon=72.5, max_lon=73.0625),
        )

    def test_partial_requires_flag(self):
        with self.assertRaises(InvalidLengthError):
            decode_cell("4FK")

    def test_partial_length_limits(self):
        with self.assertRaises(InvalidLengthError):
            decode_cell("", partial=True)
        with self.assertRaises(InvalidLengthError):
            decode_cell("4FK5MK9PPKF", partial=True)

    def test_cells_nest(self):
        """Each extra symbol selects a cell inside the previous one"""
        symbols = "4FK5MK9PPK"
        parent = Cell.root()

        for level in range(1, 11):
            cell = decode_cell(symbols[:level], partial=True)

            self.assertGreaterEqual(cell.min_lat, parent.min_lat)
            self.assertLessEqual(cell.max_lat, parent.max_lat)
            self.assertGreaterEqual(cell.min_lon, parent.min_lon)
            self.assertLessEqual(cell.max_lon, parent.max_lon)
            parent = cell

    def test_partial_invalid_symbol(self):
        with self.assertRaises(InvalidSymbolError) as ctx:
            decode_cell("4F0", partial=True)

        self.assertEqual(ctx.exception.index, 2)


class TestIsValid(TestCase):
    def test_is_valid(self):
        self.assertTrue(is_valid("4FK-5MK-9PPK"))
        self.assertTrue(is_valid("4FK5MK9PPK"))
        self.assertFalse(is_valid("4FK-5MK"))
        self.assertFalse(is_valid("XFK-5MK-9PPK"))
        self.assertFalse(is_valid(""))
