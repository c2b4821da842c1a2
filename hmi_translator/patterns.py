"""
Pattern matcher module (Patterns)

Structural decomposition of HMI texts into reusable fragments.
- Delimiter split: "Conveyor#1" -> ("Conveyor", "1")
- Underscore number split: "Discrete_alarm_66" -> ("Discrete_alarm", "66")
- Numeric placeholders: "Alarm 16 active" -> ("Alarm {{N}} active", ["16"])

None of these functions call the translator; the reuse engine decides what
to do with the fragments.
"""

import re

from .utils import is_integer

DELIMITER = "#"
UNDERSCORE = "_"
NUMBER_PLACEHOLDER = "{{N}}"

_DIGITS_RE = re.compile(r"[0-9]+")


# ==============================================================================
# [Delimiter split]
# ==============================================================================
def split_on_delimiter(text, delimiter=DELIMITER):
    """
    Splits a text on the first delimiter.

    Args:
        text (str): Text to split
        delimiter (str): Separator character

    Returns:
        tuple: (prefix, suffix), or None if the delimiter is absent
    """
    if not text or delimiter not in text:
        return None
    prefix, suffix = text.split(delimiter, 1)
    return prefix, suffix


def match_delimiter_prefix(text, previous_text, previous_translation, delimiter=DELIMITER):
    """
    Checks whether the current text shares its delimiter prefix with the previous row.

    The prefixes are compared exactly; the suffix is trimmed.

    Args:
        text (str): Current source text
        previous_text (str): Previous source text
        previous_translation (str): Translation of the previous source text

    Returns:
        tuple: (translated prefix, current suffix), or None if reuse is not possible
    """
    current = split_on_delimiter(text, delimiter)
    previous = split_on_delimiter(previous_text, delimiter)
    if current is None or previous is None:
        return None
    if current[0] != previous[0]:
        return None

    translated = split_on_delimiter(previous_translation, delimiter)
    if translated is None:
        return None

    return translated[0], current[1].strip()


# ==============================================================================
# [Underscore number split]
# ==============================================================================
def has_underscore_number_pattern(text):
    """
    Checks for the "<base>_<integer>" shape.

    Examples:
        >>> has_underscore_number_pattern("Discrete_alarm_66")
        True
        >>> has_underscore_number_pattern("NoNumber_Here")
        False
        >>> has_underscore_number_pattern("_123")
        True
        >>> has_underscore_number_pattern("text_")
        False
    """
    parts = text.split(UNDERSCORE)
    if len(parts) < 2:
        return False
    return is_integer(parts[-1])


def extract_base_and_suffix(text):
    """
    Splits a text into the part before the last underscore and the part after it.

    Args:
        text (str): Text to split

    Returns:
        tuple: (base, suffix); suffix is empty when there is no underscore

    Examples:
        >>> extract_base_and_suffix("Discrete_alarm_66")
        ('Discrete_alarm', '66')
        >>> extract_base_and_suffix("NoUnderscore")
        ('NoUnderscore', '')
        >>> extract_base_and_suffix("_123")
        ('', '123')
    """
    parts = text.split(UNDERSCORE)
    if len(parts) < 2:
        return text, ""
    return UNDERSCORE.join(parts[:-1]), parts[-1]


def match_underscore_base(text, previous_text, previous_translation):
    """
    Checks whether the current text shares its underscore base with the previous row.

    All three texts must have the "<base>_<integer>" shape, and the previous
    translation must end in the same number as the previous source; otherwise
    the split would land somewhere else in the translation.

    Returns:
        tuple: (translated base, current suffix), or None if reuse is not possible
    """
    if not previous_text or not previous_translation:
        return None
    if not has_underscore_number_pattern(text) or not has_underscore_number_pattern(previous_text):
        return None

    base, suffix = extract_base_and_suffix(text)
    previous_base, previous_suffix = extract_base_and_suffix(previous_text)
    if base != previous_base:
        return None

    if not has_underscore_number_pattern(previous_translation):
        return None
    translated_base, translated_suffix = extract_base_and_suffix(previous_translation)
    if translated_suffix != previous_suffix:
        return None
    return translated_base, suffix


# ==============================================================================
# [Numeric placeholders]
# ==============================================================================
def normalize_numbers(text):
    """
    Replaces every run of digits with a placeholder token.

    Args:
        text (str): Text to normalize

    Returns:
        tuple: (pattern, list of extracted numbers in order)

    Examples:
        >>> normalize_numbers("Alarm 16 active")
        ('Alarm {{N}} active', ['16'])
    """
    numbers = _DIGITS_RE.findall(text)
    pattern = _DIGITS_RE.sub(NUMBER_PLACEHOLDER, text)
    return pattern, numbers


def count_placeholders(pattern):
    return pattern.count(NUMBER_PLACEHOLDER)


def fill_numbers(pattern, numbers):
    """
    Substitutes numbers back into a pattern, in order.

    Raises:
        ValueError: If the placeholder count does not match the numbers
    """
    pieces = pattern.split(NUMBER_PLACEHOLDER)
    if len(pieces) - 1 != len(numbers):
        raise ValueError(
            f"pattern has {len(pieces) - 1} placeholders but {len(numbers)} numbers were given"
        )
    result = [pieces[0]]
    for number, piece in zip(numbers, pieces[1:]):
        result.append(number)
        result.append(piece)
    return "".join(result)


class PatternCache:
    """
    Run-scoped map from numeral-normalized source templates to translated templates.

    Attributes:
        overwrite (bool): Replace existing entries instead of keeping the first one
    """

    def __init__(self, overwrite=False):
        self.overwrite = overwrite
        self._patterns = {}

    def __len__(self):
        return len(self._patterns)

    def __contains__(self, pattern):
        return pattern in self._patterns

    def lookup(self, text):
        """
        Returns the cached translation for the text, with its numbers filled in.

        Args:
            text (str): Source text

        Returns:
            str: The translation, or None on a miss or a count mismatch
        """
        pattern, numbers = normalize_numbers(text)
        if not numbers:
            return None
        translated_pattern = self._patterns.get(pattern)
        if translated_pattern is None:
            return None
        if count_placeholders(translated_pattern) != len(numbers):
            return None
        return fill_numbers(translated_pattern, numbers)

    def learn(self, text, translation):
        """
        Stores the template of a fresh translation.

        Nothing is stored when the source has no numbers or when the
        translation does not carry the same number of numerals.

        Returns:
            bool: True if an entry was written
        """
        pattern, numbers = normalize_numbers(text)
        if not numbers:
            return False
        translated_pattern, translated_numbers = normalize_numbers(translation)
        if len(translated_numbers) != len(numbers):
            return False
        if pattern in self._patterns and not self.overwrite:
            return False
        self._patterns[pattern] = translated_pattern
        return True
