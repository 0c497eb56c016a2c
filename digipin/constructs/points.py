from __future__ import annotations

import re
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd
from geopandas import GeoDataFrame, points_from_xy, read_file
from pyproj import CRS

from digipin.constructs.coordinate import Coordinate
from digipin.utils.crs import LATLON_CRS
from digipin.utils.keys import DEFAULT_LATITUDE_KEY, DEFAULT_LONGITUDE_KEY


class Points:
    """
    A collection of locations to be encoded as DIGIPINs.

    Points wraps a GeoDataFrame of point geometries which is always held in WGS84
    (EPSG:4326), the system DIGIPIN codes are defined in. The index of the frame is
    used as the identifier of each point and must be unique; duplicate indices
    raise an IndexError during initialization.

    Attributes:
        coords: A list of Coordinate objects, one per point
        crs: The coordinate reference system of the points (always EPSG:4326)
        index: The pandas Index of the underlying GeoDataFrame

    Examples:
        >>> import pandas as pd
        >>> from digipin.constructs.points import Points
        >>>
        >>> df = pd.DataFrame({
        ...     'latitude': [28.6139, 19.0760, 12.9716],
        ...     'longitude': [77.2090, 72.8777, 77.5946]
        ... })
        >>> points = Points.from_dataframe(df)
        >>> len(points)
        3
    """

    _frame: GeoDataFrame

    def __init__(self, frame: GeoDataFrame):
        if frame.index.has_duplicates:
            duplicates = frame.index[frame.index.duplicated()].values
            raise IndexError(
                f"Points cannot have duplicates in the index but found {duplicates}"
            )
        self._frame = frame

    def __len__(self):
        """Number of points."""
        return len(self._frame)

    def __repr__(self):
        return f"Points(n={len(self)}, crs={self.crs.to_authority() if self.crs else None})"

    @property
    def index(self) -> pd.Index:
        """Get index to underlying GeoDataFrame."""
        return self._frame.index

    @property
    def crs(self) -> CRS:
        """Get Coordinate Reference System(CRS) to underlying GeoDataFrame."""
        return self._frame.crs

    @property
    def latitudes(self) -> np.ndarray:
        return self._frame.geometry.y.to_numpy()

    @property
    def longitudes(self) -> np.ndarray:
        return self._frame.geometry.x.to_numpy()

    @cached_property
    def coords(self) -> List[Coordinate]:
        """
        Get all points as Coordinate objects, using the index values as coordinate IDs.
        """
        return [
            Coordinate(i, g, self.crs)
            for i, g in zip(self._frame.index, self._frame.geometry)
        ]

    @classmethod
    def from_geo_dataframe(cls, frame: GeoDataFrame) -> Points:
        """
        Create points from a GeoPandas GeoDataFrame of Point geometries.

        Only the geometry and index are kept. The frame must have a CRS; it is
        reprojected to EPSG:4326 if it is in any other system.

        Args:
            frame: A GeoDataFrame with Point geometries and unique index values

        Returns:
            A new Points instance

        Raises:
            ValueError: If the frame has no CRS

        Examples:
            >>> import geopandas as gpd
            >>> from shapely.geometry import Point
            >>>
            >>> gdf = gpd.GeoDataFrame(
            ...     geometry=[Point(77.2090, 28.6139), Point(72.8777, 19.0760)],
            ...     crs='EPSG:4326'
            ... )
            >>> points = Points.from_geo_dataframe(gdf)
        """
        if frame.crs is None:
            raise ValueError(
                "no crs information found on the frame; please set a crs before encoding"
            )

        # get rid of any extra info besides geometry and index
        frame = GeoDataFrame(geometry=frame.geometry, index=frame.index)
        if frame.crs != LATLON_CRS:
            frame = frame.to_crs(LATLON_CRS)
        return Points(frame)

    @classmethod
    def from_dataframe(
        cls,
        dataframe: pd.DataFrame,
        lat_column: str = DEFAULT_LATITUDE_KEY,
        lon_column: str = DEFAULT_LONGITUDE_KEY,
    ) -> Points:
        """
        Create points from a pandas DataFrame with latitude/longitude columns in EPSG:4326.

        Args:
            dataframe: A DataFrame containing the coordinates
            lat_column: The name of the latitude column. Default is "latitude".
            lon_column: The name of the longitude column. Default is "longitude".

        Returns:
            A new Points instance indexed like the DataFrame
        """
        frame = GeoDataFrame(
            geometry=points_from_xy(dataframe[lon_column], dataframe[lat_column]),
            index=dataframe.index,
            crs=LATLON_CRS,
        )

        return Points(frame)

    @classmethod
    def from_gpx(cls, file: Union[str, Path]) -> Points:
        """
        Create points from the trackpoints of a GPX file.

        Args:
            file: Path to the GPX file

        Returns:
            A new Points instance with a range index

        Raises:
            FileNotFoundError: If the file does not exist
            TypeError: If the file does not have a .gpx extension
        """
        filepath = Path(file)
        if not filepath.is_file():
            raise FileNotFoundError(file)
        elif not filepath.suffix == ".gpx":
            raise TypeError(
                f"file of type {filepath.suffix} does not appear to be a gpx file"
            )
        data = filepath.read_text()

        lat = np.array(re.findall(r'lat="([^"]+)', data), dtype=float)
        lon = np.array(re.findall(r'lon="([^"]+)', data), dtype=float)
        df = pd.DataFrame(
            zip(lat, lon), columns=[DEFAULT_LATITUDE_KEY, DEFAULT_LONGITUDE_KEY]
        )
        return Points.from_dataframe(df)

    @classmethod
    def from_csv(
        cls,
        file: Union[str, Path],
        lat_column: str = DEFAULT_LATITUDE_KEY,
        lon_column: str = DEFAULT_LONGITUDE_KEY,
    ) -> Points:
        """
        Create points from a CSV file with latitude/longitude columns in EPSG:4326.

        Args:
            file: Path to the CSV file
            lat_column: The name of the latitude column. Default is "latitude".
            lon_column: The name of the longitude column. Default is "longitude".

        Returns:
            A new Points instance indexed by row number

        Raises:
            FileNotFoundError: If the file does not exist
            TypeError: If the file does not have a .csv extension
            ValueError: If the lat/lon columns are not found in the file

        Examples:
            >>> points = Points.from_csv('deliveries.csv', lat_column='lat', lon_column='lng')  # doctest: +SKIP
        """
        filepath = Path(file)
        if not filepath.is_file():
            raise FileNotFoundError(file)
        elif not filepath.suffix == ".csv":
            raise TypeError(
                f"file of type {filepath.suffix} does not appear to be a csv file"
            )

        columns = pd.read_csv(filepath, nrows=0).columns.to_list()
        if lat_column in columns and lon_column in columns:
            df = pd.read_csv(filepath)
            return Points.from_dataframe(df, lat_column, lon_column)
        else:
            raise ValueError(
                f"Could not find columns {lat_column!r} and {lon_column!r} in the file; "
                "provide the lat/lon column names to this function"
            )

    @classmethod
    def from_geojson(
        cls,
        file: Union[str, Path],
        index_property: Optional[str] = None,
    ) -> Points:
        """
        Create points from a GeoJSON file of Point features.

        Args:
            file: Path to the GeoJSON file
            index_property: A feature property to use as the index. If None, the
                features keep a range index. Default is None.

        Returns:
            A new Points instance
        """
        filepath = Path(file)
        frame = read_file(filepath)
        if index_property and index_property in frame.columns:
            frame = frame.set_index(index_property)

        return Points.from_geo_dataframe(frame)
