from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import Point

from digipin.constructs.coordinate import Coordinate
from digipin.constructs.pin import Pin
from digipin.constructs.points import Points
from digipin.decoder import decode, decode_cell
from digipin.encoder import encode
from digipin.utils.crs import LATLON_CRS
from digipin.utils.exceptions import DigipinException
from digipin.utils.format import format_code, strip_separators
from digipin.utils.keys import (
    DEFAULT_CODE_KEY,
    DEFAULT_LATITUDE_KEY,
    DEFAULT_LONGITUDE_KEY,
)

log = logging.getLogger(__name__)

ERROR_MODES = ("raise", "coerce")


def _check_errors(errors: str):
    if errors not in ERROR_MODES:
        raise ValueError(f"errors must be one of {ERROR_MODES}, got {errors!r}")


@dataclass
class BatchResult:
    pins: List[Pin]

    def __len__(self):
        return len(self.pins)

    @property
    def codes(self) -> List:
        return [p.code for p in self.pins]

    @property
    def failed(self) -> List[Pin]:
        """Pins whose point or code could not be converted."""
        return [p for p in self.pins if p.code is None]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the pins to a pandas DataFrame, one row per pin.

        Returns:
            A DataFrame with coordinate_id, digipin, latitude, longitude and the
            cell bounds. Failed pins have NaN cell bounds and a missing code.

        Examples:
            >>> import pandas as pd
            >>> from digipin.constructs.points import Points
            >>> points = Points.from_dataframe(pd.DataFrame({
            ...     "latitude": [18.968557, 28.6139],
            ...     "longitude": [72.822191, 77.2090],
            ... }))
            >>> df = encode_points(points).to_dataframe()
            >>> df["digipin"].iloc[0]
            '4FK-5MK-9PPK'
        """
        df = pd.DataFrame([p.to_flat_dict() for p in self.pins])
        df = df.fillna(np.nan)

        return df

    def to_geodataframe(self, geometry: str = "cell") -> gpd.GeoDataFrame:
        """
        Convert the pins to a GeoDataFrame in EPSG:4326.

        Args:
            geometry: "cell" to use the cell rectangle of each pin as its geometry,
                or "point" to use the encoded point (or decoded center). Default is "cell".

        Returns:
            A GeoDataFrame with the same columns as to_dataframe plus a geometry
            column. Failed pins get an empty geometry in "cell" mode.

        Raises:
            ValueError: If geometry is neither "cell" nor "point"

        Examples:
            >>> gdf = encode_points(points).to_geodataframe()  # doctest: +SKIP
            >>> gdf.to_file('cells.geojson', driver='GeoJSON')  # doctest: +SKIP
        """
        if geometry == "cell":
            geoms = [
                p.cell.to_polygon() if p.cell is not None else Point() for p in self.pins
            ]
        elif geometry == "point":
            geoms = [p.coordinate.to_crs(LATLON_CRS).geom for p in self.pins]
        else:
            raise ValueError(f"geometry must be 'cell' or 'point', got {geometry!r}")

        df = self.to_dataframe()

        return gpd.GeoDataFrame(df, geometry=geoms, crs=LATLON_CRS)


def encode_points(points: Points, errors: str = "raise") -> BatchResult:
    """
    Encode every point of a Points collection.

    Args:
        points: The points to encode
        errors: "raise" to stop at the first point outside the DIGIPIN bounds, or
            "coerce" to keep going and return a pin with no code for such points.
            Default is "raise".

    Returns:
        A BatchResult with one pin per point, in the order of the points

    Raises:
        OutOfRangeError: If errors is "raise" and a point is outside the bounds
        ValueError: If errors is not one of "raise" or "coerce"

    Examples:
        >>> points = Points.from_csv('deliveries.csv')  # doctest: +SKIP
        >>> result = encode_points(points, errors='coerce')  # doctest: +SKIP
        >>> print(f"{len(result.failed)} points outside the DIGIPIN area")  # doctest: +SKIP
    """
    _check_errors(errors)

    pins = []
    for coord in points.coords:
        try:
            code = encode(coord.y, coord.x)
        except DigipinException as e:
            if errors == "raise":
                raise
            log.warning(f"could not encode coordinate {coord.coordinate_id}: {e}")
            pins.append(Pin(code=None, coordinate=coord))
            continue

        pins.append(Pin(code=code, coordinate=coord, cell=decode_cell(code)))

    log.debug(f"encoded {len(pins)} points")

    return BatchResult(pins)


def decode_codes(codes: Iterable[str], errors: str = "raise") -> BatchResult:
    """
    Decode a sequence of DIGIPINs to the centers of their cells.

    The code itself is used as the coordinate id of each decoded center.
    Entries that are not strings, such as the NaN pandas reads for an empty CSV
    cell, count as invalid codes.

    Args:
        codes: DIGIPINs, grouped or not
        errors: "raise" to stop at the first invalid code, or "coerce" to keep
            going and return a pin with no code and an empty point for it.
            Default is "raise".

    Returns:
        A BatchResult with one pin per code, in input order. Decoded pins carry
        the code in grouped form.

    Raises:
        InvalidLengthError: If errors is "raise" and a code has the wrong length
        InvalidSymbolError: If errors is "raise" and a code has an unknown character
        TypeError: If errors is "raise" and an entry is not a string
        ValueError: If errors is not one of "raise" or "coerce"
    """
    _check_errors(errors)

    pins = []
    for code in codes:
        try:
            if not isinstance(code, str):
                raise TypeError(
                    f"DIGIPIN must be a string, got {type(code).__name__}"
                )
            center = decode(code)
            cell = decode_cell(code)
        except (DigipinException, TypeError) as e:
            if errors == "raise":
                raise
            log.warning(f"could not decode {code!r}: {e}")
            pins.append(Pin(code=None, coordinate=Coordinate(code, Point(), LATLON_CRS)))
            continue

        coord = Coordinate.from_lat_lon(
            center.latitude, center.longitude, coordinate_id=code
        )
        pins.append(
            Pin(code=format_code(strip_separators(code)), coordinate=coord, cell=cell)
        )

    log.debug(f"decoded {len(pins)} codes")

    return BatchResult(pins)


def encode_dataframe(
    dataframe: pd.DataFrame,
    lat_column: str = DEFAULT_LATITUDE_KEY,
    lon_column: str = DEFAULT_LONGITUDE_KEY,
    code_column: str = DEFAULT_CODE_KEY,
    errors: str = "raise",
) -> pd.DataFrame:
    """
    Add a DIGIPIN column to a DataFrame of latitude/longitude values.

    Args:
        dataframe: The input table; it is not modified
        lat_column: The name of the latitude column. Default is "latitude".
        lon_column: The name of the longitude column. Default is "longitude".
        code_column: The name of the column to write codes into. Default is "digipin".
        errors: "raise" or "coerce", as in encode_points. Default is "raise".

    The rows are matched up by position, so the index may hold duplicate labels.

    Returns:
        A copy of the DataFrame with the code column added as object dtype;
        coerced failures are None

    Examples:
        >>> df = pd.read_csv('stores.csv')  # doctest: +SKIP
        >>> df = encode_dataframe(df, lat_column='lat', lon_column='lng')  # doctest: +SKIP
    """
    points = Points.from_dataframe(
        dataframe.reset_index(drop=True), lat_column, lon_column
    )
    result = encode_points(points, errors=errors)

    out = dataframe.copy()
    out[code_column] = pd.Series(result.codes, index=out.index, dtype=object)

    return out
