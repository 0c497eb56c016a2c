"""Exceptions raised by the DIGIPIN encoder and decoder.

Each failure kind is its own class so callers can catch the one they care
about. They all derive from ``DigipinException`` and from ``ValueError``.
"""

from typing import Optional


class DigipinException(Exception):
    """
    Base class for all DIGIPIN errors.
    """


class OutOfRangeError(DigipinException, ValueError):
    """
    A latitude or longitude given to the encoder lies outside the DIGIPIN bounding box.

    Attributes:
        axis: Either "latitude" or "longitude"
        value: The rejected value
        minimum: The lower end of the valid interval (inclusive)
        maximum: The upper end of the valid interval (inclusive)
    """

    def __init__(self, axis: str, value: float, minimum: float, maximum: float):
        self.axis = axis
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{axis.capitalize()} {value} out of range [{minimum}, {maximum}]"
        )


class InvalidLengthError(DigipinException, ValueError):
    """
    A code handed to the decoder has the wrong number of symbols once separators are removed.

    Attributes:
        actual: The number of symbols found
        expected: The number of symbols required
    """

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"Invalid DIGIPIN length: {actual}, expected {expected}")


class InvalidSymbolError(DigipinException, ValueError):
    """
    A character is not part of the DIGIPIN alphabet.

    Attributes:
        symbol: The offending character
        index: Zero-based position of the character in the code with separators
            removed, or None when the lookup was made outside of a code
    """

    def __init__(self, symbol: str, index: Optional[int] = None):
        self.symbol = symbol
        self.index = index
        if index is None:
            message = f"Invalid character '{symbol}' in DIGIPIN"
        else:
            message = f"Invalid character '{symbol}' at position {index} in DIGIPIN"
        super().__init__(message)
