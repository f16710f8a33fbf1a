"""Tests for environment-driven settings."""

from rdcalc.config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_INPUT, MAX_DEPTH_CEILING, Settings


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s == Settings(max_input=DEFAULT_MAX_INPUT, max_depth=DEFAULT_MAX_DEPTH, legacy=False)


def test_values_from_env():
    s = Settings.from_env({
        "RDCALC_MAX_INPUT": "40",
        "RDCALC_MAX_DEPTH": "8",
        "RDCALC_LEGACY": "Yes",
    })
    assert s.max_input == 40
    assert s.max_depth == 8
    assert s.legacy is True


def test_bad_values_fall_back_to_defaults():
    s = Settings.from_env({
        "RDCALC_MAX_INPUT": "lots",
        "RDCALC_MAX_DEPTH": "-3",
        "RDCALC_LEGACY": "maybe",
    })
    assert s.max_input == DEFAULT_MAX_INPUT
    assert s.max_depth == DEFAULT_MAX_DEPTH
    assert s.legacy is False


def test_override_keeps_unset_fields():
    base = Settings(max_input=10, max_depth=5, legacy=True)
    s = base.override(max_depth=7)
    assert s == Settings(max_input=10, max_depth=7, legacy=True)
    assert base.max_depth == 5


def test_depth_from_env_is_capped():
    s = Settings.from_env({"RDCALC_MAX_DEPTH": "100000"})
    assert s.max_depth == MAX_DEPTH_CEILING
    assert Settings().override(max_depth=100000).max_depth == MAX_DEPTH_CEILING
