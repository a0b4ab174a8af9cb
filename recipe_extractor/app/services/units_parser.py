"""Map free-text unit preferences onto one canonical unit per measurement type."""

import enum
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UnitCategory(str, enum.Enum):
    LENGTH = "length"
    LIQUID = "liquid"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"


class ResolvedUnits(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: Optional[str] = None
    liquid: Optional[str] = None
    weight: Optional[str] = None
    temperature: Optional[str] = None


# Order matters: the first keyword found in the input wins.
UNIT_PATTERNS = MappingProxyType(
    {
        UnitCategory.LENGTH: (
            "cm",
            "centimeter",
            "inch",
            "inches",
            "mm",
            "millimeter",
            "meter",
            "metres",
            "feet",
            "ft",
        ),
        UnitCategory.LIQUID: (
            "ml",
            "milliliter",
            "liter",
            "litre",
            "cup",
            "cups",
            "tablespoon",
            "tbsp",
            "teaspoon",
            "tsp",
            "fluid ounce",
            "fl oz",
            "pint",
            "quart",
            "gallon",
        ),
        UnitCategory.WEIGHT: (
            "gram",
            "grams",
            "g",
            "kilogram",
            "kg",
            "ounce",
            "oz",
            "pound",
            "pounds",
            "lb",
            "lbs",
        ),
        UnitCategory.TEMPERATURE: (
            "celsius",
            "centigrade",
            "fahrenheit",
            "kelvin",
        ),
    }
)

METRIC_DEFAULTS = MappingProxyType(
    {
        UnitCategory.LENGTH: "cm",
        UnitCategory.LIQUID: "ml",
        UnitCategory.WEIGHT: "grams",
        UnitCategory.TEMPERATURE: "celsius",
    }
)

IMPERIAL_DEFAULTS = MappingProxyType(
    {
        UnitCategory.LENGTH: "inch",
        UnitCategory.LIQUID: "cup",
        UnitCategory.WEIGHT: "ounces",
        UnitCategory.TEMPERATURE: "fahrenheit",
    }
)


def parse_units_category(units: Optional[str], category: UnitCategory | str) -> Optional[str]:
    """Pick the unit for one category out of a free-text preference.

    This is a substring heuristic, not a parser: "2 lbs of flour" yields
    "lb" for weight because "lb" precedes "lbs" in the keyword list, and a
    single string can produce units for several categories at once.
    Returns None when nothing matches, meaning "keep the source units".
    """
    if not units:
        return None
    category = UnitCategory(category)
    units_lower = units.lower()

    for unit in UNIT_PATTERNS[category]:
        if unit in units_lower:
            return unit

    if "metric" in units_lower:
        return METRIC_DEFAULTS[category]
    if "imperial" in units_lower:
        return IMPERIAL_DEFAULTS[category]
    return None


def resolve_units(units: Optional[str]) -> ResolvedUnits:
    return ResolvedUnits(
        **{category.value: parse_units_category(units, category) for category in UnitCategory}
    )


def construct_units_string(
    weight: Optional[str] = None,
    liquid: Optional[str] = None,
    length: Optional[str] = None,
    temperature: Optional[str] = None,
) -> Optional[str]:
    """Join per-type unit requests into the single string the pipeline reads."""
    parts = [value.strip() for value in (weight, liquid, length, temperature) if value and value.strip()]
    return " ".join(parts) or None
