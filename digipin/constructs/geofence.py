from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Tuple, Union

from geopandas import read_file
from pyproj import CRS, Transformer
from shapely.geometry import MultiPoint, Polygon, box, mapping
from shapely.ops import transform

from digipin.constructs.cell import Cell
from digipin.constructs.grid import DIGIPIN_GRID, DIGIPIN_LENGTH
from digipin.constructs.points import Points
from digipin.utils.crs import LATLON_CRS, XY_CRS
from digipin.utils.format import format_code

log = logging.getLogger(__name__)

DEFAULT_MAX_CELLS = 4096


class Geofence:
    """
    A geographic boundary polygon with an associated coordinate reference system (CRS).

    A Geofence describes an area of interest, such as a delivery zone or the
    visible part of a map, and can list the DIGIPIN cells that cover it.

    Args:
        crs: The coordinate reference system of the geofence geometry
        geometry: A Shapely Polygon defining the boundary

    Attributes:
        crs: The CRS of the geofence
        geometry: The Polygon geometry representing the bounded area

    Examples:
        >>> from digipin.constructs.geofence import Geofence
        >>>
        >>> fence = Geofence.from_bounds(south=18.9, west=72.8, north=19.0, east=72.9)
        >>> cells = fence.covering_cells(level=4)
        >>>
        >>> # Load a geofence from a GeoJSON file
        >>> fence = Geofence.from_geojson('ward_boundary.geojson')  # doctest: +SKIP
    """

    def __init__(self, crs: CRS, geometry: Polygon):
        self.crs = crs
        self.geometry = geometry

    @classmethod
    def from_geojson(cls, file: Union[Path, str]) -> Geofence:
        """
        Create a geofence from a GeoJSON file containing a single polygon.

        Args:
            file: Path to the GeoJSON file

        Returns:
            A new Geofence instance

        Raises:
            TypeError: If the file contains multiple polygons or lacks CRS information
        """
        filepath = Path(file)
        frame = read_file(filepath)

        if len(frame) > 1:
            raise TypeError(
                "found multiple polygons in the input; please only provide one"
            )
        elif frame.crs is None:
            raise TypeError(
                "no crs information found in the file; please make sure file has a crs"
            )

        polygon = frame.iloc[0].geometry

        return Geofence(crs=frame.crs, geometry=polygon)

    @classmethod
    def from_bounds(
        cls, south: float, west: float, north: float, east: float
    ) -> Geofence:
        """
        Create a rectangular geofence from WGS84 edges, such as a map viewport.

        Raises:
            ValueError: If south is not below north or west is not below east
        """
        if south >= north or west >= east:
            raise ValueError(
                f"invalid bounds: south={south}, west={west}, north={north}, east={east}"
            )
        return Geofence(crs=LATLON_CRS, geometry=box(west, south, east, north))

    @classmethod
    def from_points(
        cls,
        points: Points,
        padding: float = 1e3,
        buffer_res: int = 2,
    ) -> Geofence:
        """
        Create a geofence by buffering around a set of points.

        The buffer is computed in Web Mercator so the padding can be given in meters;
        the result is returned in EPSG:4326.

        Args:
            points: The points to enclose
            padding: The buffer distance in meters. Default is 1000m.
            buffer_res: The resolution of the buffer polygon (segments per quadrant). Default is 2.

        Returns:
            A new Geofence in EPSG:4326 around the convex hull of the points
        """
        to_xy = Transformer.from_crs(points.crs, XY_CRS, always_xy=True).transform
        to_latlon = Transformer.from_crs(XY_CRS, LATLON_CRS, always_xy=True).transform

        hull = MultiPoint([c.geom for c in points.coords]).convex_hull
        polygon = transform(to_xy, hull).buffer(padding, buffer_res)

        return Geofence(crs=LATLON_CRS, geometry=transform(to_latlon, polygon))

    def to_geojson(self) -> str:
        """
        Convert the geofence to a GeoJSON geometry string in EPSG:4326.
        """
        if self.crs != LATLON_CRS:
            project = Transformer.from_crs(self.crs, LATLON_CRS, always_xy=True).transform
            geometry = transform(project, self.geometry)
        else:
            geometry = self.geometry

        return json.dumps(mapping(geometry))

    def covering_cells(
        self, level: int, max_cells: int = DEFAULT_MAX_CELLS
    ) -> List[Tuple[str, Cell]]:
        """
        List the DIGIPIN cells of a level that intersect the geofence.

        Cells are found by subdividing the DIGIPIN bounding box and only descending
        into cells that touch the fence, so the cost follows the size of the answer.

        Args:
            level: The grid level of the cells to return (1..10)
            max_cells: Upper limit on the number of cells at any level of the search.
                Default is 4096.

        Returns:
            A list of (code, cell) pairs, codes grouped for display, ordered by code
            in grid reading order

        Raises:
            ValueError: If the level is outside 1..10, or the fence needs more than
                max_cells cells

        Examples:
            >>> fence = Geofence.from_bounds(south=18.9, west=72.6, north=19.0, east=72.7)
            >>> [code for code, _ in fence.covering_cells(level=3)]
            ['4FK']
        """
        if not 1 <= level <= DIGIPIN_LENGTH:
            raise ValueError(
                f"level must be between 1 and {DIGIPIN_LENGTH}, got {level}"
            )

        if self.crs != LATLON_CRS:
            project = Transformer.from_crs(self.crs, LATLON_CRS, always_xy=True).transform
            fence = transform(project, self.geometry)
        else:
            fence = self.geometry

        frontier = [("", Cell.root())]
        for depth in range(1, level + 1):
            next_frontier = []
            for prefix, cell in frontier:
                for row, symbols in enumerate(DIGIPIN_GRID):
                    for col, symbol in enumerate(symbols):
                        child = cell.child(row, col)
                        if child.to_polygon().intersects(fence):
                            next_frontier.append((prefix + symbol, child))

            if len(next_frontier) > max_cells:
                raise ValueError(
                    f"geofence needs {len(next_frontier)} cells at level {depth}, "
                    f"more than max_cells={max_cells}; use a lower level or a smaller fence"
                )
            frontier = next_frontier

        log.debug(f"geofence is covered by {len(frontier)} level {level} cells")

        return [(format_code(prefix), cell) for prefix, cell in frontier]
