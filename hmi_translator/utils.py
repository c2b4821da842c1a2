"""
Utility module (Utilities)

Small helpers shared by the classifier and the pattern matchers.
"""

import re

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def is_integer(text):
    """
    Checks whether the whole text parses as a plain integer.

    Only ASCII digits with an optional sign are accepted, so values such as
    "1_000", "١٢" or " 12" are not integers.

    Args:
        text: Text to check

    Returns:
        bool: True if the text is an integer literal

    Examples:
        >>> is_integer("66")
        True
        >>> is_integer("-3")
        True
        >>> is_integer("6.5")
        False
        >>> is_integer("")
        False
    """
    if not isinstance(text, str):
        return False
    return _INTEGER_RE.fullmatch(text) is not None


def strip_quotes(text):
    """Removes surrounding double quotes and whitespace returned by the model."""
    return text.strip().strip('"').strip()
