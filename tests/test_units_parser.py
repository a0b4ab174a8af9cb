import pytest

from recipe_extractor.app.services.units_parser import (
    ResolvedUnits,
    UnitCategory,
    construct_units_string,
    parse_units_category,
    resolve_units,
)


@pytest.mark.parametrize(
    "units,category,expected",
    [
        ("grams", UnitCategory.WEIGHT, "gram"),
        ("I prefer ml please", UnitCategory.LIQUID, "ml"),
        ("Cups", UnitCategory.LIQUID, "cup"),
        ("fahrenheit", UnitCategory.TEMPERATURE, "fahrenheit"),
        ("centimeters", UnitCategory.LENGTH, "centimeter"),
        ("2 lbs of flour", "weight", "lb"),
    ],
)
def test_keyword_matches(units, category, expected):
    assert parse_units_category(units, category) == expected


def test_metric_defaults():
    resolved = resolve_units("metric")
    assert resolved == ResolvedUnits(length="cm", liquid="ml", weight="grams", temperature="celsius")


def test_imperial_defaults():
    resolved = resolve_units("Imperial")
    assert resolved == ResolvedUnits(length="inch", liquid="cup", weight="ounces", temperature="fahrenheit")


def test_explicit_keyword_beats_system_default():
    resolved = resolve_units("metric but cups")
    assert resolved.liquid == "cup"
    assert resolved.weight == "grams"


def test_unknown_units_resolve_to_nothing():
    assert resolve_units("whatever works") == ResolvedUnits()


@pytest.mark.parametrize("units", [None, ""])
def test_empty_units(units):
    for category in UnitCategory:
        assert parse_units_category(units, category) is None


def test_invalid_category():
    with pytest.raises(ValueError):
        parse_units_category("grams", "volume")


def test_construct_units_string_joins_present_values():
    assert construct_units_string(weight="grams", liquid=None, length="cm", temperature=" celsius ") == "grams cm celsius"


def test_construct_units_string_empty():
    assert construct_units_string() is None
    assert construct_units_string(weight="  ") is None


def test_documented_examples():
    assert parse_units_category("metric", UnitCategory.WEIGHT) == "grams"
    assert parse_units_category("no units here", UnitCategory.WEIGHT) is None
    assert construct_units_string(weight="grams", temperature="celsius") == "grams celsius"
