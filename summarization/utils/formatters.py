"""
Text formatting helpers for generated summaries.
"""

from typing import List


_ORDINAL_WORDS: List[str] = [
    'first', 'second', 'third', 'fourth', 'fifth', 'sixth',
    'seventh', 'eighth', 'ninth', 'tenth', 'eleventh', 'twelfth',
]


def format_y(value: float) -> str:
    """
    Format a number for summary text: at most two decimals, no trailing zeros.

    Example:
        >>> format_y(6.000000000000005), format_y(6.6667), format_y(0.5)
        ('6', '6.67', '0.5')
    """
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return '0' if text in ('-0', '') else text


def ordinal_text(index: int) -> str:
    """
    Ordinal for a zero-based position: 0 -> "first", 12 -> "13th", 20 -> "21st".

    Words are used up to "twelfth"; numeric suffixes beyond that, so any
    number of weeks can be named.
    """
    if index < 0:
        raise ValueError(f"Ordinal position must be non-negative, got {index}")

    if index < len(_ORDINAL_WORDS):
        return _ORDINAL_WORDS[index]

    number = index + 1
    if 11 <= number % 100 <= 13:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(number % 10, 'th')
    return f"{number}{suffix}"
