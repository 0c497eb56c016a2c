"""
# DIGIPIN Example

An example of encoding locations as DIGIPINs, decoding them again, and listing
the grid cells that cover an area of interest.
"""


def main():
    """
    First, encode a single point.
    DIGIPIN is defined on WGS84 latitude/longitude inside the box 2.5-38.5 N, 63.5-99.5 E.
    """

    from digipin import decode, encode

    code = encode(18.968557, 72.822191)
    print(code)  # 4FK-5MK-9PPK

    """
    Decoding gives back the center of the roughly 4m x 4m cell the code names.
    Hyphens are optional on the way in.
    """

    center = decode("4FK5MK9PPK")
    print(center.latitude, center.longitude)

    """
    Points outside the DIGIPIN area are rejected rather than clamped, and malformed
    codes raise their own error kinds:
    """

    from digipin import InvalidSymbolError, OutOfRangeError

    try:
        encode(51.5072, -0.1276)
    except OutOfRangeError as e:
        print(e.axis, e.value, (e.minimum, e.maximum))

    try:
        decode("XFK-5MK-9PPK")
    except InvalidSymbolError as e:
        print(e.symbol, e.index)

    """
    For many points at once, load them into a Points collection and encode them in one go.
    With errors="coerce", points outside the area get an empty code instead of stopping the batch.
    """

    import pandas as pd

    from digipin.batch import encode_points
    from digipin.constructs.points import Points

    df = pd.DataFrame(
        {
            "latitude": [28.6139, 19.0760, 12.9716, 51.5072],
            "longitude": [77.2090, 72.8777, 77.5946, -0.1276],
        },
        index=["delhi", "mumbai", "bangalore", "london"],
    )
    points = Points.from_dataframe(df)

    result = encode_points(points, errors="coerce")
    print(result.to_dataframe())

    """
    The cell of each code can be exported as a polygon layer:
    """

    cells = result.to_geodataframe(geometry="cell")
    print(cells.geometry.head())

    """
    Finally, list the level 5 cells (about 4 km across) covering a small area.
    Coarser levels are prefixes of the full code.
    """

    from digipin.constructs.geofence import Geofence
    from digipin.utils.levels import grid_level

    fence = Geofence.from_bounds(south=18.90, west=72.80, north=18.98, east=72.86)
    print(grid_level(5).approx_size)
    for prefix, cell in fence.covering_cells(level=5):
        print(prefix, cell.center)


if __name__ == "__main__":
    main()
