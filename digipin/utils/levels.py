"""The ten levels of the DIGIPIN grid and their approximate sizes on the ground.

Every symbol of a code narrows the cell by a factor of four on each axis, so a
level n cell spans 36 / 4**n degrees in both latitude and longitude.
"""

from typing import NamedTuple, Tuple

from digipin.constructs.cell import Cell
from digipin.constructs.grid import BOUNDS, DIGIPIN_LENGTH, GRID_SIZE
from digipin.utils.geo import cell_dimensions_m


class GridLevel(NamedTuple):
    """
    Describes one level of the DIGIPIN grid.

    Attributes:
        level: The number of symbols in a code of this level (1..10)
        lat_span: The height of a cell in degrees of latitude
        lon_span: The width of a cell in degrees of longitude
        approx_size: A rounded, human readable cell size
        description: The kind of place a cell of this size typically covers
    """

    level: int
    lat_span: float
    lon_span: float
    approx_size: str
    description: str


_LEVEL_LABELS = (
    ("~1000 km", "Regions"),
    ("~250 km", "Large States"),
    ("~62.5 km", "Districts"),
    ("~15.6 km", "Cities/Towns"),
    ("~3.9 km", "Neighborhoods"),
    ("~1 km", "Local areas"),
    ("~250 m", "City blocks"),
    ("~60 m", "Building complex"),
    ("~15 m", "Individual buildings"),
    ("~4 m", "Final precision"),
)

GRID_LEVELS: Tuple[GridLevel, ...] = tuple(
    GridLevel(
        level=n,
        lat_span=(BOUNDS.max_lat - BOUNDS.min_lat) / GRID_SIZE**n,
        lon_span=(BOUNDS.max_lon - BOUNDS.min_lon) / GRID_SIZE**n,
        approx_size=size,
        description=description,
    )
    for n, (size, description) in enumerate(_LEVEL_LABELS, start=1)
)

# Upper zoom bound for each level, in web map zoom units
_ZOOM_THRESHOLDS = (3, 4, 6, 8, 10, 12, 14, 16, 17)


def grid_level(level: int) -> GridLevel:
    """
    Look up the description of a grid level.

    Raises:
        ValueError: If the level is outside 1..10
    """
    if not 1 <= level <= DIGIPIN_LENGTH:
        raise ValueError(f"level must be between 1 and {DIGIPIN_LENGTH}, got {level}")
    return GRID_LEVELS[level - 1]


def cell_size_m(level: int, latitude: float) -> Tuple[float, float]:
    """
    Compute the ground size of a cell at a level, centered on a latitude.

    Cells shrink east to west as they move north, so the width depends on the latitude.

    Args:
        level: The grid level (1..10)
        latitude: The latitude the cell is centered on, in decimal degrees

    Returns:
        A tuple of (width, height) in meters

    Examples:
        >>> width, height = cell_size_m(10, 20.0)
        >>> round(height, 1)
        3.8
    """
    info = grid_level(level)
    half = info.lat_span / 2
    cell = Cell(
        min_lat=latitude - half,
        max_lat=latitude + half,
        min_lon=BOUNDS.min_lon,
        max_lon=BOUNDS.min_lon + info.lon_span,
    )

    return cell_dimensions_m(cell)


def level_for_zoom(zoom: float) -> int:
    """
    Pick the code level to label grid cells with at a web map zoom level.

    Low zoom levels show large areas and get short codes.

    Args:
        zoom: The slippy map zoom level

    Returns:
        The grid level, 1 to 10

    Examples:
        >>> level_for_zoom(5)
        3
        >>> level_for_zoom(18)
        10
    """
    for level, threshold in enumerate(_ZOOM_THRESHOLDS, start=1):
        if zoom <= threshold:
            return level
    return DIGIPIN_LENGTH
