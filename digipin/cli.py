from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich import print
from rich.table import Table

from digipin.batch import encode_dataframe
from digipin.benchmark import BENCHMARK_COORDINATES, run_benchmark
from digipin.constructs.grid import DIGIPIN_LENGTH
from digipin.decoder import decode, decode_cell
from digipin.encoder import encode_symbols
from digipin.utils.exceptions import DigipinException
from digipin.utils.format import format_code
from digipin.utils.keys import (
    DEFAULT_CODE_KEY,
    DEFAULT_LATITUDE_KEY,
    DEFAULT_LONGITUDE_KEY,
)
from digipin.utils.levels import GRID_LEVELS

app = typer.Typer(help="Encode and decode DIGIPIN codes.")


def _fail(e: Exception):
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("encode")
def encode_cmd(
    lat: float = typer.Argument(..., help="Latitude, 2.5 to 38.5"),
    lon: float = typer.Argument(..., help="Longitude, 63.5 to 99.5"),
    level: int = typer.Option(
        DIGIPIN_LENGTH, "--level", "-l", min=1, max=DIGIPIN_LENGTH, help="Number of symbols."
    ),
):
    """Encode a latitude and longitude into a DIGIPIN."""
    try:
        symbols = encode_symbols(lat, lon, level)
    except DigipinException as e:
        _fail(e)

    typer.echo(format_code(symbols))


@app.command("decode")
def decode_cmd(
    code: str = typer.Argument(..., help="DIGIPIN, with or without hyphens"),
    bounds: bool = typer.Option(False, "--bounds", help="Also print the cell bounds."),
):
    """Decode a DIGIPIN into the center of its cell."""
    try:
        center = decode(code)
        cell = decode_cell(code)
    except DigipinException as e:
        _fail(e)

    typer.echo(f"{center.latitude:.6f}, {center.longitude:.6f}")

    if bounds:
        table = Table(title=format_code(code))
        table.add_column("edge")
        table.add_column("degrees", justify="right")
        for edge, value in cell._asdict().items():
            table.add_row(edge, f"{value:.8f}")
        print(table)


@app.command("levels")
def levels_cmd():
    """Show the size of the cells at each grid level."""
    table = Table(title="DIGIPIN grid levels")
    table.add_column("level", justify="right")
    table.add_column("span (deg)", justify="right")
    table.add_column("approx. size")
    table.add_column("typical area")

    for lvl in GRID_LEVELS:
        table.add_row(
            str(lvl.level), f"{lvl.lat_span:.8g}", lvl.approx_size, lvl.description
        )

    print(table)


@app.command("benchmark")
def benchmark_cmd(
    iterations: int = typer.Option(100_000, "--iterations", "-n", min=1),
    samples: int = typer.Option(5, "--samples", min=0, help="Sample codes to show."),
):
    """Time the encoder and decoder."""
    table = Table(title=f"DIGIPIN benchmark ({iterations:,} iterations)")
    table.add_column("operation")
    table.add_column("total (ms)", justify="right")
    table.add_column("avg (us/op)", justify="right")
    table.add_column("ops/sec", justify="right")

    for result in run_benchmark(iterations):
        table.add_row(
            result.operation,
            f"{result.seconds * 1000:.2f}",
            f"{result.microseconds_per_op:.3f}",
            f"{result.ops_per_second:,.0f}",
        )
    print(table)

    if samples:
        sample_table = Table(title="Sample codes")
        sample_table.add_column("city")
        sample_table.add_column("digipin")
        sample_table.add_column("decoded center")
        for name, lat, lon in BENCHMARK_COORDINATES[:samples]:
            code = format_code(encode_symbols(lat, lon))
            center = decode(code)
            sample_table.add_row(
                name, code, f"{center.latitude:.6f}, {center.longitude:.6f}"
            )
        print(sample_table)


@app.command("encode-csv")
def encode_csv_cmd(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input CSV file"),
    lat_column: str = typer.Option(DEFAULT_LATITUDE_KEY, "--lat-column"),
    lon_column: str = typer.Option(DEFAULT_LONGITUDE_KEY, "--lon-column"),
    code_column: str = typer.Option(DEFAULT_CODE_KEY, "--code-column"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output CSV; defaults to standard output."
    ),
    coerce: bool = typer.Option(
        False, "--coerce", help="Leave the code empty for out-of-range rows instead of failing."
    ),
):
    """Add a DIGIPIN column to a CSV of coordinates."""
    df = pd.read_csv(file)
    missing = [c for c in (lat_column, lon_column) if c not in df.columns]
    if missing:
        raise typer.BadParameter(f"columns not found in {file}: {', '.join(missing)}")

    try:
        out = encode_dataframe(
            df,
            lat_column=lat_column,
            lon_column=lon_column,
            code_column=code_column,
            errors="coerce" if coerce else "raise",
        )
    except DigipinException as e:
        _fail(e)

    if output is None:
        typer.echo(out.to_csv(index=False), nl=False)
    else:
        out.to_csv(output, index=False)
        typer.echo(f"wrote {len(out)} rows to {output}", err=True)


if __name__ == "__main__":
    app()
