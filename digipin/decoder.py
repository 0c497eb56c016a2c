from __future__ import annotations

from typing import Dict, NamedTuple

from digipin.constructs.cell import Cell
from digipin.constructs.grid import DIGIPIN_LENGTH, position_of
from digipin.utils.exceptions import (
    DigipinException,
    InvalidLengthError,
    InvalidSymbolError,
)
from digipin.utils.format import strip_separators

# Decimal places kept in decoded coordinates, well below the ~4 m final cell size
DECIMAL_PLACES = 6


class LatLon(NamedTuple):
    """
    The center of a decoded DIGIPIN cell.

    Attributes:
        latitude: The latitude in decimal degrees, rounded to 6 places
        longitude: The longitude in decimal degrees, rounded to 6 places
    """

    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return self._asdict()


def decode_cell(code: str, partial: bool = False) -> Cell:
    """
    Resolve a DIGIPIN to the cell it names.

    Separators are removed wherever they appear before the code is checked.

    Args:
        code: The code, grouped or not
        partial: If True, accept any prefix of 1 to 10 symbols and return the coarser
            cell it names. Default is False, which requires a full 10 symbol code.

    Returns:
        The cell named by the code

    Raises:
        InvalidLengthError: If the symbol count is not 10 (or not 1..10 when partial is True)
        InvalidSymbolError: If a character is not in the DIGIPIN alphabet; the index
            refers to the code with separators removed

    Examples:
        >>> decode_cell('4FK', partial=True)
        Cell(min_lat=18.8125, max_lat=19.375, min_lon=72.5, max_lon=73.0625)
    """
    pin = strip_separators(code)

    if partial:
        if not 1 <= len(pin) <= DIGIPIN_LENGTH:
            raise InvalidLengthError(len(pin), DIGIPIN_LENGTH)
    elif len(pin) != DIGIPIN_LENGTH:
        raise InvalidLengthError(len(pin), DIGIPIN_LENGTH)

    cell = Cell.root()
    for index, symbol in enumerate(pin):
        try:
            row, col = position_of(symbol)
        except InvalidSymbolError as e:
            raise InvalidSymbolError(symbol, index) from e

        cell = cell.child(row, col)

    return cell


def decode(code: str) -> LatLon:
    """
    Decode a DIGIPIN back into the central latitude and longitude of its cell.

    Args:
        code: A 10 symbol code, with or without separators (e.g. '4FK-5MK-9PPK' or '4FK5MK9PPK')

    Returns:
        The center of the cell as floats rounded to 6 decimal places

    Raises:
        InvalidLengthError: If the code does not contain exactly 10 symbols
        InvalidSymbolError: If a character is not in the DIGIPIN alphabet

    Examples:
        >>> from digipin import decode
        >>> decode('4FK-5MK-9PPK')
        LatLon(latitude=18.968557, longitude=72.822191)
    """
    lat, lon = decode_cell(code).center

    return LatLon(
        latitude=round(lat, DECIMAL_PLACES),
        longitude=round(lon, DECIMAL_PLACES),
    )


def is_valid(code: str) -> bool:
    """
    Check whether a string is a well formed, full length DIGIPIN.
    """
    try:
        decode_cell(code)
    except DigipinException:
        return False
    return True
