from digipin.decoder import LatLon, decode, decode_cell, is_valid
from digipin.encoder import encode, encode_cell, encode_coordinate, encode_symbols
from digipin.utils.exceptions import (
    DigipinException,
    InvalidLengthError,
    InvalidSymbolError,
    OutOfRangeError,
)

__version__ = "0.1.0"

__all__ = [
    "DigipinException",
    "InvalidLengthError",
    "InvalidSymbolError",
    "LatLon",
    "OutOfRangeError",
    "decode",
    "decode_cell",
    "encode",
    "encode_cell",
    "encode_coordinate",
    "encode_symbols",
    "is_valid",
]