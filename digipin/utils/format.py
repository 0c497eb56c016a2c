from digipin.constructs.grid import SEPARATOR, SEPARATOR_POSITIONS


def strip_separators(code: str) -> str:
    """Remove every separator character from a code."""
    return code.replace(SEPARATOR, "")


def format_code(symbols: str) -> str:
    """
    Group raw DIGIPIN symbols for display.

    A full code becomes XXX-XXX-XXXX. Shorter prefixes only get the separators
    that fall inside them, so a 5 symbol prefix is formatted as XXX-XX and a
    3 symbol prefix has no separator at all.

    Args:
        symbols: Raw symbols; any separators already present are removed first

    Returns:
        The grouped code

    Examples:
        >>> format_code('4FK5MK9PPK')
        '4FK-5MK-9PPK'
        >>> format_code('4FK5')
        '4FK-5'
    """
    symbols = strip_separators(symbols)

    groups = []
    start = 0
    for stop in SEPARATOR_POSITIONS:
        if len(symbols) <= stop:
            break
        groups.append(symbols[start:stop])
        start = stop
    groups.append(symbols[start:])

    return SEPARATOR.join(groups)
