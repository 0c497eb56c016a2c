"""Standard column names used when DIGIPIN results are written to tables.

Batch encoding, the CSV command and the dataframe exports all share these keys so
their outputs can be joined without renaming.
"""

# Column holding the grouped DIGIPIN code
DEFAULT_CODE_KEY = "digipin"

# Input columns expected when reading points from tabular data
DEFAULT_LATITUDE_KEY = "latitude"
DEFAULT_LONGITUDE_KEY = "longitude"

# Identifier of the source point a result row belongs to
DEFAULT_COORDINATE_ID_KEY = "coordinate_id"

# Bounds of the resolved cell
CELL_BOUND_KEYS = ("min_lat", "max_lat", "min_lon", "max_lon")
