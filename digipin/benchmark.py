"""Timing harness for the DIGIPIN encoder and decoder."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, NamedTuple, Sequence, Tuple

from digipin.decoder import decode
from digipin.encoder import encode

log = logging.getLogger(__name__)

# (name, latitude, longitude) of major cities across the DIGIPIN area
BENCHMARK_COORDINATES: Tuple[Tuple[str, float, float], ...] = (
    ("New Delhi", 28.6139, 77.2090),
    ("Mumbai", 19.0760, 72.8777),
    ("Bangalore", 12.9716, 77.5946),
    ("Chennai", 13.0827, 80.2707),
    ("Kolkata", 22.5726, 88.3639),
    ("Hyderabad", 17.3850, 78.4867),
    ("Ahmedabad", 23.0225, 72.5714),
    ("Pune", 18.5204, 73.8567),
    ("Patna", 25.5941, 85.1376),
    ("Jaipur", 26.9124, 75.7873),
)


class BenchmarkResult(NamedTuple):
    """
    Timing of one operation.

    Attributes:
        operation: "encode" or "decode"
        iterations: The number of calls made
        seconds: The total wall clock time of all calls
    """

    operation: str
    iterations: int
    seconds: float

    @property
    def microseconds_per_op(self) -> float:
        return self.seconds / self.iterations * 1e6

    @property
    def ops_per_second(self) -> float:
        if self.seconds == 0:
            return float("inf")
        return self.iterations / self.seconds


def _time(fn: Callable[[int], object], iterations: int) -> float:
    start = time.perf_counter()
    for i in range(iterations):
        fn(i)
    return time.perf_counter() - start


def run_benchmark(
    iterations: int = 100_000,
    coordinates: Sequence[Tuple[str, float, float]] = BENCHMARK_COORDINATES,
) -> List[BenchmarkResult]:
    """
    Time repeated encode and decode calls over a fixed set of coordinates.

    The coordinates are cycled through; the codes used for the decode run are
    produced once up front so that only decoding is timed.

    Args:
        iterations: The number of calls per operation. Default is 100,000.
        coordinates: (name, latitude, longitude) triples to cycle through.
            Default is BENCHMARK_COORDINATES.

    Returns:
        A list with the encode result followed by the decode result

    Raises:
        ValueError: If iterations is less than 1 or no coordinates are given

    Examples:
        >>> for result in run_benchmark(iterations=10_000):  # doctest: +SKIP
        ...     print(result.operation, f"{result.ops_per_second:,.0f} ops/sec")
    """
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")
    if not coordinates:
        raise ValueError("at least one coordinate is needed to run the benchmark")

    n = len(coordinates)

    log.info(f"timing {iterations} encode calls")
    encode_seconds = _time(
        lambda i: encode(coordinates[i % n][1], coordinates[i % n][2]), iterations
    )

    codes = [encode(lat, lon) for _, lat, lon in coordinates]

    log.info(f"timing {iterations} decode calls")
    decode_seconds = _time(lambda i: decode(codes[i % n]), iterations)

    return [
        BenchmarkResult("encode", iterations, encode_seconds),
        BenchmarkResult("decode", iterations, decode_seconds),
    ]
