from typing import NamedTuple, Optional

from digipin.constructs.cell import Cell
from digipin.constructs.coordinate import Coordinate
from digipin.utils.keys import (
    CELL_BOUND_KEYS,
    DEFAULT_CODE_KEY,
    DEFAULT_COORDINATE_ID_KEY,
    DEFAULT_LATITUDE_KEY,
    DEFAULT_LONGITUDE_KEY,
)


class Pin(NamedTuple):
    """
    Links a coordinate to its DIGIPIN and the cell the code names.

    Pins are the rows of a batch result. When a point could not be encoded (or a
    code could not be decoded) and errors were coerced, the code and cell are None.

    Attributes:
        code: The grouped DIGIPIN, or None if encoding or decoding failed
        coordinate: The encoded point, or the decoded cell center (an empty point
            when the code could not be decoded)
        cell: The level 10 cell named by the code, or None if there is no code

    Examples:
        >>> from digipin.constructs.coordinate import Coordinate
        >>> from digipin.constructs.pin import Pin
        >>> from digipin.decoder import decode_cell
        >>>
        >>> coord = Coordinate.from_lat_lon(18.968557, 72.822191)
        >>> pin = Pin(code='4FK-5MK-9PPK', coordinate=coord, cell=decode_cell('4FK-5MK-9PPK'))
        >>> pin.to_flat_dict()['digipin']
        '4FK-5MK-9PPK'
    """

    code: Optional[str]
    coordinate: Coordinate
    cell: Optional[Cell] = None

    def to_flat_dict(self) -> dict:
        """
        Convert this pin to a flat dictionary suitable for DataFrame creation.

        Returns:
            A dictionary with the coordinate id, the code, the WGS84 latitude and
            longitude, and the four cell bounds (None when there is no cell)
        """
        out = {
            DEFAULT_COORDINATE_ID_KEY: self.coordinate.coordinate_id,
            DEFAULT_CODE_KEY: self.code,
        }

        # undecodable codes carry an empty point
        if self.coordinate.geom.is_empty:
            out[DEFAULT_LATITUDE_KEY] = None
            out[DEFAULT_LONGITUDE_KEY] = None
        else:
            out[DEFAULT_LATITUDE_KEY] = self.coordinate.latitude
            out[DEFAULT_LONGITUDE_KEY] = self.coordinate.longitude

        if self.cell is None:
            out.update({k: None for k in CELL_BOUND_KEYS})
        else:
            out.update(self.cell._asdict())

        return out
