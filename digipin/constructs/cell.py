from __future__ import annotations

import json
from typing import NamedTuple, Tuple

from shapely.geometry import Polygon, box, mapping

from digipin.constructs.grid import BOUNDS, GRID_SIZE


class Cell(NamedTuple):
    """
    A rectangle of the DIGIPIN grid, in WGS84 degrees.

    Cells are produced by narrowing the DIGIPIN bounding box once per symbol of a
    code; a level n cell always lies inside the level n-1 cell it was cut from.
    Cells are plain values and are never cached or shared between calls.

    Attributes:
        min_lat: The southern edge
        max_lat: The northern edge
        min_lon: The western edge
        max_lon: The eastern edge

    Examples:
        >>> from digipin.constructs.cell import Cell
        >>> root = Cell.root()
        >>> # the north-west quarter, symbol 'F'
        >>> root.child(0, 0)
        Cell(min_lat=29.5, max_lat=38.5, min_lon=63.5, max_lon=72.5)
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @classmethod
    def root(cls) -> Cell:
        """
        The level zero cell covering the full DIGIPIN bounding box.
        """
        return cls(*BOUNDS)

    @property
    def lat_step(self) -> float:
        return (self.max_lat - self.min_lat) / GRID_SIZE

    @property
    def lon_step(self) -> float:
        return (self.max_lon - self.min_lon) / GRID_SIZE

    @property
    def center(self) -> Tuple[float, float]:
        """The unrounded (latitude, longitude) midpoint."""
        return (self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2

    def child(self, row: int, col: int) -> Cell:
        """
        Cut out the sub-cell at a grid position.

        Rows count down from the northern edge, columns count up from the western edge.

        Args:
            row: The row index of the sub-cell (0..3)
            col: The column index of the sub-cell (0..3)

        Returns:
            The sub-cell one level deeper
        """
        lat_step = self.lat_step
        lon_step = self.lon_step

        return Cell(
            min_lat=self.max_lat - lat_step * (row + 1),
            max_lat=self.max_lat - lat_step * row,
            min_lon=self.min_lon + lon_step * col,
            max_lon=self.min_lon + lon_step * (col + 1),
        )

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon
        )

    def to_polygon(self) -> Polygon:
        """
        Convert the cell to a Shapely polygon in (lon, lat) order, EPSG:4326.
        """
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def to_geojson(self) -> str:
        """
        Convert the cell to a GeoJSON geometry string.
        """
        return json.dumps(mapping(self.to_polygon()))
