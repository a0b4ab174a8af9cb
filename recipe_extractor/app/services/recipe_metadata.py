"""Parse the metadata header the extraction model puts ahead of a recipe."""

import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

METADATA_START = "---RECIPE_METADATA---"
METADATA_END = "---END_METADATA---"

NOT_A_RECIPE = "this is not a recipe"
NOT_A_RECIPE_ALIASES = frozenset({NOT_A_RECIPE, "not a recipe"})

_BLOCK_RE = re.compile(re.escape(METADATA_START) + r"([\s\S]*?)" + re.escape(METADATA_END))
_BLOCK_WITH_TRAILING_RE = re.compile(
    re.escape(METADATA_START) + r"[\s\S]*?" + re.escape(METADATA_END) + r"\s*"
)
_NOT_APPLICABLE = {"n/a", "na", "none", ""}


class RecipeMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    time_minutes: Optional[int] = None
    serves_people: Optional[int] = None
    makes_items: Optional[str] = None
    language: Optional[str] = None
    units_length: Optional[str] = None
    units_liquid: Optional[str] = None
    units_weight: Optional[str] = None


def is_not_a_recipe(text: str) -> bool:
    return text.strip().strip(".").lower() in NOT_A_RECIPE_ALIASES


def _field(section: str, key: str) -> Optional[str]:
    match = re.search(rf"^[ \t]*{key}[ \t]*:[ \t]*(.+?)[ \t]*$", section, flags=re.M)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def _int_field(section: str, key: str) -> Optional[int]:
    value = _field(section, key)
    if value is None:
        return None
    match = re.match(r"\d+", value)
    return int(match.group()) if match else None


def _optional_field(section: str, key: str) -> Optional[str]:
    value = _field(section, key)
    if value is None or value.lower() in _NOT_APPLICABLE:
        return None
    return value


def parse_recipe_metadata(text: str) -> Tuple[RecipeMetadata, str]:
    """Split an extraction response into (metadata, recipe body).

    A response without a metadata block yields empty metadata and the text
    unchanged (apart from surrounding whitespace).
    """
    content = (text or "").strip()
    match = _BLOCK_RE.search(content)
    if not match:
        return RecipeMetadata(), content

    section = match.group(1)
    metadata = RecipeMetadata(
        name=_field(section, "NAME"),
        time_minutes=_int_field(section, "TIME_MINUTES"),
        serves_people=_int_field(section, "SERVES_PEOPLE"),
        makes_items=_field(section, "MAKES_ITEMS"),
        language=_optional_field(section, "LANGUAGE"),
        units_length=_optional_field(section, "UNITS_LENGTH"),
        units_liquid=_optional_field(section, "UNITS_LIQUID"),
        units_weight=_optional_field(section, "UNITS_WEIGHT"),
    )
    body = _BLOCK_WITH_TRAILING_RE.sub("", content, count=1).strip()
    return metadata, body
