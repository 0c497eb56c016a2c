from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Tuple

from digipin.constructs.cell import Cell
from digipin.constructs.grid import BOUNDS, DIGIPIN_LENGTH, GRID_SIZE, symbol_at
from digipin.utils.exceptions import OutOfRangeError
from digipin.utils.format import format_code

if TYPE_CHECKING:
    from digipin.constructs.coordinate import Coordinate


def _check_bounds(lat: float, lon: float):
    if not BOUNDS.min_lat <= lat <= BOUNDS.max_lat:
        raise OutOfRangeError("latitude", lat, BOUNDS.min_lat, BOUNDS.max_lat)
    if not BOUNDS.min_lon <= lon <= BOUNDS.max_lon:
        raise OutOfRangeError("longitude", lon, BOUNDS.min_lon, BOUNDS.max_lon)


def _check_level(level: int):
    if not 1 <= level <= DIGIPIN_LENGTH:
        raise ValueError(f"level must be between 1 and {DIGIPIN_LENGTH}, got {level}")


def _clamp(index: int) -> int:
    return min(GRID_SIZE - 1, max(0, index))


def _narrow(lat: float, lon: float, level: int) -> Tuple[List[str], Cell]:
    cell = Cell.root()
    symbols = []

    for _ in range(level):
        lat_step = (cell.max_lat - cell.min_lat) / GRID_SIZE
        lon_step = (cell.max_lon - cell.min_lon) / GRID_SIZE

        # rows are numbered from the north, latitude grows from the south
        row = 3 - _clamp(math.floor((lat - cell.min_lat) / lat_step))
        col = _clamp(math.floor((lon - cell.min_lon) / lon_step))

        symbols.append(symbol_at(row, col))

        min_lat = cell.min_lat + lat_step * (3 - row)
        min_lon = cell.min_lon + lon_step * col
        cell = Cell(
            min_lat=min_lat,
            max_lat=min_lat + lat_step,
            min_lon=min_lon,
            max_lon=min_lon + lon_step,
        )

    return symbols, cell


def encode_symbols(lat: float, lon: float, level: int = DIGIPIN_LENGTH) -> str:
    """
    Encode a point into raw, ungrouped DIGIPIN symbols.

    Passing a level below 10 gives the code of the coarser cell containing the
    point, which is always a prefix of the full code.

    Args:
        lat: The latitude in decimal degrees, 2.5 to 38.5 inclusive
        lon: The longitude in decimal degrees, 63.5 to 99.5 inclusive
        level: How many symbols to produce (1..10). Default is 10.

    Returns:
        A string of `level` symbols with no separators

    Raises:
        OutOfRangeError: If the latitude or longitude is outside the DIGIPIN bounds
        ValueError: If the level is outside 1..10

    Examples:
        >>> encode_symbols(18.968557, 72.822191)
        '4FK5MK9PPK'
        >>> encode_symbols(18.968557, 72.822191, level=3)
        '4FK'
    """
    _check_bounds(lat, lon)
    _check_level(level)

    symbols, _ = _narrow(lat, lon, level)

    return "".join(symbols)


def encode(lat: float, lon: float) -> str:
    """
    Encode a latitude and longitude into a DIGIPIN.

    The bounding box is split into a 4x4 grid ten times over; each level picks the
    sub-cell containing the point and contributes that cell's symbol. Points lying
    exactly on the northern or eastern edge of the box are kept in the last row or
    column rather than rejected.

    Args:
        lat: The latitude in decimal degrees, 2.5 to 38.5 inclusive
        lon: The longitude in decimal degrees, 63.5 to 99.5 inclusive

    Returns:
        The 10 symbol code grouped as XXX-XXX-XXXX

    Raises:
        OutOfRangeError: If the latitude or longitude is outside the DIGIPIN bounds.
            Values are never clamped into range.

    Examples:
        >>> from digipin import encode
        >>> encode(18.968557, 72.822191)
        '4FK-5MK-9PPK'
    """
    return format_code(encode_symbols(lat, lon))


def encode_cell(lat: float, lon: float, level: int = DIGIPIN_LENGTH) -> Cell:
    """
    Find the cell the encoder settles on for a point at a given level.

    Args:
        lat: The latitude in decimal degrees
        lon: The longitude in decimal degrees
        level: The depth of the cell (1..10). Default is 10.

    Returns:
        The level `level` cell containing the point

    Raises:
        OutOfRangeError: If the latitude or longitude is outside the DIGIPIN bounds
        ValueError: If the level is outside 1..10
    """
    _check_bounds(lat, lon)
    _check_level(level)

    _, cell = _narrow(lat, lon, level)

    return cell


def encode_coordinate(coordinate: Coordinate, level: int = DIGIPIN_LENGTH) -> str:
    """
    Encode a Coordinate in any CRS; it is reprojected to EPSG:4326 first.

    Args:
        coordinate: The coordinate to encode
        level: How many symbols to produce (1..10). Default is 10.

    Returns:
        The grouped code, or grouped prefix for levels below 10

    Examples:
        >>> from digipin.constructs.coordinate import Coordinate
        >>> coord = Coordinate.from_lat_lon(28.6139, 77.2090).to_crs('EPSG:3857')
        >>> encode_coordinate(coord, level=3)
        '39J'
    """
    return format_code(encode_symbols(coordinate.latitude, coordinate.longitude, level))
