"""
Text classifier module (Classifier)

Decides what to do with a source cell before any translation is attempted.
- Header rows are skipped
- Short, numeric, placeholder and separator texts are copied verbatim
- The untouched "Text" default is never translated
- Quick mode skips rows whose target cell already holds a translation
"""

import re

from .utils import is_integer


# ==============================================================================
# [Classification values]
# ==============================================================================
class Classification:
    """Row classification values"""
    HEADER = "header"
    TOO_SHORT = "too_short"
    NUMERIC = "numeric"
    PLACEHOLDER = "placeholder"
    SEPARATOR = "separator"
    NO_OP_DEFAULT = "no_op_default"
    TRANSLATABLE = "translatable"


# Classifications whose source text is copied to the target cell unchanged
COPY_CLASSIFICATIONS = (
    Classification.TOO_SHORT,
    Classification.NUMERIC,
    Classification.PLACEHOLDER,
    Classification.SEPARATOR,
)

MIN_TEXT_LENGTH = 3

# Default value inserted by the HMI engineering tool
DEFAULT_TEXT_MARKER = "text"

# Alarms like "Alarm 16: " carry no language content
_MEANINGLESS_ALARM_RE = re.compile(r"^alarm\s+\d+:\s*$", re.IGNORECASE)

SEPARATOR_CHARS = frozenset("-=_*.~")
SEPARATOR_RATIO = 0.8


def is_placeholder(text):
    """
    Checks whether a text is formatting or code that must be copied, not translated.

    Args:
        text (str): Trimmed cell text

    Returns:
        bool: True for ##tag##, #tag#, @tag@ and empty alarm labels

    Examples:
        >>> is_placeholder("##Motor_1##")
        True
        >>> is_placeholder("@Value@")
        True
        >>> is_placeholder("Alarm 16: ")
        True
        >>> is_placeholder("#")
        False
    """
    if text.startswith("##") and text.endswith("##"):
        return True
    if text.startswith("#") and text.endswith("#") and len(text) > 1:
        return True
    if text.startswith("@") and text.endswith("@") and len(text) > 1:
        return True
    return _MEANINGLESS_ALARM_RE.match(text) is not None


def is_visual_separator(text):
    """
    Checks whether a text is a ruler line such as "-----" or "=====".

    At least three characters are required, and at least 80% of them must be
    separator characters.
    """
    if len(text) < MIN_TEXT_LENGTH:
        return False
    separators = sum(1 for char in text if char in SEPARATOR_CHARS)
    return separators / len(text) >= SEPARATOR_RATIO


def is_default_text(text):
    """True for the "Text" default value, in any letter case."""
    return text.lower() == DEFAULT_TEXT_MARKER


def classify(text, row_index=None):
    """
    Classifies a trimmed source text. The first matching rule wins.

    Args:
        text (str): Trimmed source cell text
        row_index (int, optional): 0-based row index; row 0 is the header

    Returns:
        str: A Classification value
    """
    if row_index == 0:
        return Classification.HEADER
    if len(text) < MIN_TEXT_LENGTH or text.startswith("!"):
        return Classification.TOO_SHORT
    if is_integer(text):
        return Classification.NUMERIC
    if is_placeholder(text):
        return Classification.PLACEHOLDER
    if is_visual_separator(text):
        return Classification.SEPARATOR
    if is_default_text(text):
        return Classification.NO_OP_DEFAULT
    return Classification.TRANSLATABLE


def is_already_translated(target_text):
    """
    Quick-mode gate: does the target cell already hold a translation?

    Surrounding whitespace is trimmed, then surrounding double quotes are
    removed and the result is lowercased. Anything other than an empty value
    or the "text" default counts as translated.

    Args:
        target_text (str): Current target cell value (may be None)

    Returns:
        bool: True if the row should be left alone in quick mode

    Examples:
        >>> is_already_translated('"Text"')
        False
        >>> is_already_translated('" text "')
        True
        >>> is_already_translated("Actual translation")
        True
    """
    if not target_text:
        return False
    check = str(target_text).strip().strip('"').lower()
    return check != "" and check != DEFAULT_TEXT_MARKER
