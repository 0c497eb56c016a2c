"""Coordinate Reference System (CRS) constants used throughout digipin.

- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326), the only system DIGIPIN codes are defined in
- XY_CRS: Web Mercator projected coordinates (EPSG:3857), used for metric buffering
"""

from pyproj import CRS

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# DIGIPIN bounds and cells are expressed in decimal degrees of this system
LATLON_CRS = CRS(4326)

# Web Mercator projected coordinate system (EPSG:3857)
# Coordinates are in meters (easting, northing)
XY_CRS = CRS(3857)
