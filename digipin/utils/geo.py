from typing import Tuple

from pyproj import Geod

from digipin.constructs.cell import Cell
from digipin.constructs.coordinate import Coordinate
from digipin.utils.crs import LATLON_CRS

# Geodesic calculations on the WGS84 ellipsoid, the datum DIGIPIN is defined on
WGS84_GEOD = Geod(ellps="WGS84")


def coord_to_coord_dist(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate the geodesic distance between two coordinates in meters.

    Both coordinates are reprojected to EPSG:4326 first, so they may be in any CRS.

    Args:
        a: The first coordinate
        b: The second coordinate

    Returns:
        The distance along the WGS84 ellipsoid, in meters

    Examples:
        >>> from digipin.constructs.coordinate import Coordinate
        >>> delhi = Coordinate.from_lat_lon(28.6139, 77.2090)
        >>> mumbai = Coordinate.from_lat_lon(19.0760, 72.8777)
        >>> 1100 < coord_to_coord_dist(delhi, mumbai) / 1000 < 1200
        True
    """
    a = a.to_crs(LATLON_CRS)
    b = b.to_crs(LATLON_CRS)
    _, _, dist = WGS84_GEOD.inv(a.x, a.y, b.x, b.y)

    return dist


def cell_dimensions_m(cell: Cell) -> Tuple[float, float]:
    """
    Measure a cell on the ground.

    The width is taken along the cell's central parallel, the height along its
    western meridian.

    Args:
        cell: The cell to measure

    Returns:
        A tuple of (width, height) in meters
    """
    mid_lat, _ = cell.center
    _, _, width = WGS84_GEOD.inv(cell.min_lon, mid_lat, cell.max_lon, mid_lat)
    _, _, height = WGS84_GEOD.inv(cell.min_lon, cell.min_lat, cell.min_lon, cell.max_lat)

    return width, height
