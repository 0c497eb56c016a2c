from __future__ import annotations

import math
from typing import Any, NamedTuple

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError
from shapely.geometry import Point

from digipin.encoder import encode_coordinate
from digipin.utils.crs import LATLON_CRS


class Coordinate(NamedTuple):
    """
    A single geographic point with its coordinate reference system (CRS).

    DIGIPIN codes are defined on WGS84 latitude/longitude, so a Coordinate in any
    other CRS is reprojected to EPSG:4326 before it is encoded.

    Attributes:
        coordinate_id: An identifier for this coordinate (any hashable type)
        geom: The Shapely Point geometry
        crs: The pyproj CRS of the geometry
        x: The x value (longitude in EPSG:4326, easting in projected systems)
        y: The y value (latitude in EPSG:4326, northing in projected systems)

    Examples:
        >>> from digipin.constructs.coordinate import Coordinate
        >>> coord = Coordinate.from_lat_lon(18.968557, 72.822191)
        >>> coord.to_digipin()
        '4FK-5MK-9PPK'
    """

    coordinate_id: Any
    geom: Point
    crs: CRS

    def __repr__(self):
        crs_a = self.crs.to_authority() if self.crs else "Null"
        return f"Coordinate(coordinate_id={self.coordinate_id}, x={self.x}, y={self.y}, crs={crs_a})"

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float, coordinate_id: Any = None) -> Coordinate:
        """
        Create a coordinate from latitude and longitude values in WGS84 (EPSG:4326).

        Args:
            lat: The latitude in decimal degrees
            lon: The longitude in decimal degrees
            coordinate_id: An optional identifier. Default is None.

        Returns:
            A new Coordinate in EPSG:4326
        """
        return cls(coordinate_id=coordinate_id, geom=Point(lon, lat), crs=LATLON_CRS)

    @property
    def x(self) -> float:
        return self.geom.x

    @property
    def y(self) -> float:
        return self.geom.y

    @property
    def latitude(self) -> float:
        """The WGS84 latitude of this coordinate, reprojecting if needed."""
        return self.to_crs(LATLON_CRS).y

    @property
    def longitude(self) -> float:
        """The WGS84 longitude of this coordinate, reprojecting if needed."""
        return self.to_crs(LATLON_CRS).x

    def to_crs(self, new_crs: Any) -> Coordinate:
        """
        Transform this coordinate to a different coordinate reference system (CRS).

        If the target CRS is the same as the current CRS the coordinate is returned unchanged.

        Args:
            new_crs: The target CRS. Can be a pyproj.CRS object, an EPSG string
                (e.g., 'EPSG:4326'), an integer EPSG code, or anything pyproj.CRS() accepts

        Returns:
            A new Coordinate in the target CRS with the same coordinate_id

        Raises:
            ValueError: If new_crs cannot be parsed, or if the transformation
                produces infinite values

        Examples:
            >>> coord = Coordinate.from_lat_lon(28.6139, 77.2090)
            >>> mercator_coord = coord.to_crs('EPSG:3857')
        """
        # convert the incoming crs to an pyproj.crs.CRS object; this could fail
        try:
            new_crs = CRS(new_crs)
        except ProjError as e:
            raise ValueError(
                f"Could not parse incoming `new_crs` parameter: {new_crs}"
            ) from e

        if new_crs == self.crs:
            return self

        transformer = Transformer.from_crs(self.crs, new_crs, always_xy=True)
        new_x, new_y = transformer.transform(self.geom.x, self.geom.y)

        if math.isinf(new_x) or math.isinf(new_y):
            raise ValueError(
                f"Unable to convert {self.crs} ({self.geom.x}, {self.geom.y}) -> {new_crs} ({new_x}, {new_y})"
            )

        return Coordinate(
            coordinate_id=self.coordinate_id,
            geom=Point(new_x, new_y),
            crs=new_crs,
        )

    def to_digipin(self) -> str:
        """
        Encode this coordinate as a grouped DIGIPIN.

        Raises:
            OutOfRangeError: If the point lies outside the DIGIPIN bounding box
        """
        return encode_coordinate(self)
