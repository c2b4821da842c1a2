import pytest

from hmi_translator.patterns import (
    PatternCache,
    extract_base_and_suffix,
    fill_numbers,
    has_underscore_number_pattern,
    match_delimiter_prefix,
    match_underscore_base,
    normalize_numbers,
    split_on_delimiter,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Discrete_alarm_66", True),
        ("Discrete_alarm_67", True),
        ("DQ16x24VDC/0.5AST_21", True),
        ("SomeOtherText", False),
        ("NoNumber_Here", False),
        ("Single_123", True),
        ("Multiple_underscores_in_text_45", True),
        ("", False),
        ("_", False),
        ("_123", True),
        ("text_", False),
    ],
)
def test_has_underscore_number_pattern(text, expected):
    assert has_underscore_number_pattern(text) is expected


@pytest.mark.parametrize(
    "text,base,suffix",
    [
        ("Discrete_alarm_66", "Discrete_alarm", "66"),
        ("DQ16x24VDC/0.5AST_22", "DQ16x24VDC/0.5AST", "22"),
        ("Single_123", "Single", "123"),
        ("Multiple_underscores_in_text_45", "Multiple_underscores_in_text", "45"),
        ("NoUnderscore", "NoUnderscore", ""),
        ("", "", ""),
        ("_", "", ""),
        ("_123", "", "123"),
        ("text_", "text", ""),
    ],
)
def test_extract_base_and_suffix(text, base, suffix):
    assert extract_base_and_suffix(text) == (base, suffix)


def test_split_on_first_delimiter_only():
    assert split_on_delimiter("A#B#C") == ("A", "B#C")
    assert split_on_delimiter("No delimiter") is None
    assert split_on_delimiter(None) is None


def test_match_delimiter_prefix():
    assert match_delimiter_prefix("Pump#2 ", "Pump#1", "Pumpe#1") == ("Pumpe", "2")
    assert match_delimiter_prefix("Valve#2", "Pump#1", "Pumpe#1") is None
    # prefixes are compared without trimming
    assert match_delimiter_prefix("Pump #2", "Pump#1", "Pumpe#1") is None
    # translation lost its delimiter
    assert match_delimiter_prefix("Pump#2", "Pump#1", "Pumpe 1") is None


def test_match_underscore_base():
    assert match_underscore_base("Start_2", "Start_1", "Démarrer_1") == ("Démarrer", "2")
    assert match_underscore_base("Stop_2", "Start_1", "Démarrer_1") is None
    assert match_underscore_base("Start_2", "Start_x", "Démarrer_x") is None
    assert match_underscore_base("Start_2", "Start_1", "Démarrer 1") is None
    assert match_underscore_base("Start_2", None, None) is None
    # translation moved or dropped the trailing number
    assert match_underscore_base("Discrete_alarm_67", "Discrete_alarm_66", "Alarme_discrète 66") is None
    assert match_underscore_base("Start_2", "Start_1", "Démarrer_1 (M_3)") is None
    assert match_underscore_base("Start_2", "Start_1", "Démarrer_7") is None


def test_normalize_numbers():
    pattern, numbers = normalize_numbers("Alarm 16 active")
    assert pattern == "Alarm {{N}} active"
    assert numbers == ["16"]
    assert fill_numbers(pattern, numbers) == "Alarm 16 active"


def test_normalize_multiple_numbers():
    pattern, numbers = normalize_numbers("Motor 3 speed 1500 rpm")
    assert pattern == "Motor {{N}} speed {{N}} rpm"
    assert numbers == ["3", "1500"]


def test_fill_numbers_rejects_count_mismatch():
    with pytest.raises(ValueError):
        fill_numbers("Alarm {{N}}", ["1", "2"])


def test_pattern_cache_reuses_template():
    cache = PatternCache()
    assert cache.learn("Alarm 16 active", "Alarme 16 active")
    assert cache.lookup("Alarm 17 active") == "Alarme 17 active"
    assert cache.lookup("Alarm active") is None
    assert cache.lookup("Warning 17 active") is None


def test_pattern_cache_rejects_mismatched_counts():
    cache = PatternCache()
    assert not cache.learn("Motor 3 speed 1500", "Moteur trois vitesse 1500")
    assert len(cache) == 0


def test_pattern_cache_ignores_texts_without_numbers():
    cache = PatternCache()
    assert not cache.learn("Pump running", "Pompe en marche")
    assert len(cache) == 0


def test_pattern_cache_first_writer_wins():
    cache = PatternCache()
    cache.learn("Valve 1 open", "Vanne 1 ouverte")
    assert not cache.learn("Valve 2 open", "Soupape 2 ouverte")
    assert cache.lookup("Valve 3 open") == "Vanne 3 ouverte"


def test_pattern_cache_overwrite_policy():
    cache = PatternCache(overwrite=True)
    cache.learn("Valve 1 open", "Vanne 1 ouverte")
    assert cache.learn("Valve 2 open", "Soupape 2 ouverte")
    assert cache.lookup("Valve 3 open") == "Soupape 3 ouverte"
