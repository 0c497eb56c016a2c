from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

from digipin.utils.exceptions import InvalidSymbolError

# Symbol layout, row 0 is the northernmost band and column 0 the westernmost
DIGIPIN_GRID: Tuple[Tuple[str, ...], ...] = (
    ("F", "C", "9", "8"),
    ("J", "3", "2", "7"),
    ("K", "4", "5", "6"),
    ("L", "M", "P", "T"),
)

GRID_SIZE = 4
DIGIPIN_LENGTH = 10

SEPARATOR = "-"
# Number of symbols preceding each separator in a grouped code
SEPARATOR_POSITIONS = (3, 6)

CHAR_TO_POSITION: Mapping[str, Tuple[int, int]] = MappingProxyType(
    {
        symbol: (row, col)
        for row, symbols in enumerate(DIGIPIN_GRID)
        for col, symbol in enumerate(symbols)
    }
)

SYMBOLS = frozenset(CHAR_TO_POSITION)


class BoundingBox(NamedTuple):
    """
    The rectangle, in WGS84 degrees, that DIGIPIN codes can address.

    Attributes:
        min_lat: The southern edge
        max_lat: The northern edge
        min_lon: The western edge
        max_lon: The eastern edge
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def lat_interval(self) -> Tuple[float, float]:
        return self.min_lat, self.max_lat

    @property
    def lon_interval(self) -> Tuple[float, float]:
        return self.min_lon, self.max_lon

    def contains(self, lat: float, lon: float) -> bool:
        """
        Check whether a point lies inside the box; all four edges are inclusive.

        Args:
            lat: The latitude in decimal degrees
            lon: The longitude in decimal degrees

        Returns:
            True if the point is inside or on the edge of the box
        """
        return (
            self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon
        )


BOUNDS = BoundingBox(min_lat=2.5, max_lat=38.5, min_lon=63.5, max_lon=99.5)


def symbol_at(row: int, col: int) -> str:
    """
    Look up the symbol at a grid position.

    Args:
        row: The row index, 0 (north) to 3 (south)
        col: The column index, 0 (west) to 3 (east)

    Returns:
        The symbol at that position

    Raises:
        IndexError: If either index is outside 0..3

    Examples:
        >>> symbol_at(0, 0)
        'F'
        >>> symbol_at(3, 3)
        'T'
    """
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise IndexError(f"grid position ({row}, {col}) is outside the 4x4 grid")
    return DIGIPIN_GRID[row][col]


def position_of(symbol: str) -> Tuple[int, int]:
    """
    Look up the grid position of a symbol; the inverse of symbol_at.

    Lookups are case-sensitive.

    Args:
        symbol: A single character

    Returns:
        A (row, col) tuple

    Raises:
        InvalidSymbolError: If the character is not in the DIGIPIN alphabet

    Examples:
        >>> position_of('5')
        (2, 2)
    """
    try:
        return CHAR_TO_POSITION[symbol]
    except KeyError:
        raise InvalidSymbolError(symbol) from None
