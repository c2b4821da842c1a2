import pytest

from hmi_translator.classifier import (
    Classification,
    classify,
    is_already_translated,
    is_placeholder,
    is_visual_separator,
)


@pytest.mark.parametrize("text", ["", "a", "ab", "!!", "42", "!Motor stopped", "!xy"])
def test_short_or_bang_texts_are_too_short(text):
    assert classify(text, 5) == Classification.TOO_SHORT


@pytest.mark.parametrize("text", ["123", "-45", "+7000", "0042"])
def test_integers_are_numeric(text):
    assert classify(text, 1) == Classification.NUMERIC


@pytest.mark.parametrize("text", ["12.5", "1_000", "12 V"])
def test_non_integer_numbers_are_not_numeric(text):
    assert classify(text, 1) != Classification.NUMERIC


@pytest.mark.parametrize(
    "text",
    ["##Motor_1##", "#Tag#", "@Value@", "Alarm 16: ", "ALARM 3:", "alarm   7:"],
)
def test_placeholders(text):
    assert is_placeholder(text)
    assert classify(text, 3) == Classification.PLACEHOLDER


@pytest.mark.parametrize("text", ["Alarm 16: Pump", "#Tag", "Motor#1", "@Value"])
def test_not_placeholders(text):
    assert not is_placeholder(text)


def test_header_row_wins_over_everything():
    assert classify("Text", 0) == Classification.HEADER
    assert classify("##x##", 0) == Classification.HEADER


@pytest.mark.parametrize("text", ["Text", "text", "TEXT", "tExT"])
def test_default_text_is_no_op(text):
    assert classify(text, 2) == Classification.NO_OP_DEFAULT


def test_regular_text_is_translatable():
    assert classify("Conveyor belt stopped", 2) == Classification.TRANSLATABLE


@pytest.mark.parametrize(
    "text,expected",
    [
        ("---------------------------------------------", True),
        ("=============================================", True),
        ("_____", True),
        ("*****", True),
        (".....", True),
        ("-", False),
        ("--", False),
        ("Hello world", False),
        ("Some-text-with-dashes", False),
        ("123-456-789", False),
        ("A-B-C-D-E", False),
        ("---------------------------------------------text", True),
        ("text---------------------------------------------", True),
        ("-----text-----", False),
    ],
)
def test_visual_separator(text, expected):
    assert is_visual_separator(text) is expected


def test_separator_lines_are_copied():
    assert classify("==========", 4) == Classification.SEPARATOR


@pytest.mark.parametrize(
    "target,translated",
    [
        ("", False),
        (None, False),
        ("Text", False),
        (" text ", False),
        ('"Text"', False),
        ("TEXT", False),
        ("text", False),
        ('"TEXT"', False),
        ('" text "', True),
        ("Actual translation", True),
        ("Some text", True),
        ("Translated content", True),
    ],
)
def test_quick_mode_gate(target, translated):
    assert is_already_translated(target) is translated
