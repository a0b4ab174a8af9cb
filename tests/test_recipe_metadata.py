import pytest

from recipe_extractor.app.services.recipe_metadata import (
    RecipeMetadata,
    is_not_a_recipe,
    parse_recipe_metadata,
)

FULL_RESPONSE = """---RECIPE_METADATA---
NAME: Chocolate Chip Cookies
TIME_MINUTES: 45 minutes
SERVES_PEOPLE: 6
MAKES_ITEMS: 24 cookies
LANGUAGE: Spanish
UNITS_LENGTH: N/A
UNITS_LIQUID: ml
UNITS_WEIGHT: grams
---END_METADATA---

# Galletas con chispas de chocolate

- 250 grams flour
"""


def test_parses_all_fields():
    metadata, body = parse_recipe_metadata(FULL_RESPONSE)
    assert metadata == RecipeMetadata(
        name="Chocolate Chip Cookies",
        time_minutes=45,
        serves_people=6,
        makes_items="24 cookies",
        language="Spanish",
        units_length=None,
        units_liquid="ml",
        units_weight="grams",
    )
    assert body == "# Galletas con chispas de chocolate\n\n- 250 grams flour"


def test_makes_items_keeps_not_applicable():
    metadata, _ = parse_recipe_metadata(
        "---RECIPE_METADATA---\nNAME: Soup\nMAKES_ITEMS: N/A\n---END_METADATA---\n# Soup"
    )
    assert metadata.makes_items == "N/A"
    assert metadata.language is None


def test_non_numeric_counts_are_dropped():
    metadata, _ = parse_recipe_metadata(
        "---RECIPE_METADATA---\nTIME_MINUTES: about an hour\nSERVES_PEOPLE: many\n---END_METADATA---\nbody"
    )
    assert metadata.time_minutes is None
    assert metadata.serves_people is None


def test_missing_block_returns_text():
    metadata, body = parse_recipe_metadata("  # Plain recipe\n\n- egg  \n")
    assert metadata == RecipeMetadata()
    assert body == "# Plain recipe\n\n- egg"


def test_field_names_are_line_anchored():
    metadata, _ = parse_recipe_metadata(
        "---RECIPE_METADATA---\nNAME: Rice\nSURNAME: nope\n---END_METADATA---\nbody"
    )
    assert metadata.name == "Rice"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("this is not a recipe", True),
        ("This is not a recipe.", True),
        ("  NOT A RECIPE ", True),
        ("# Soup\nthis is not a recipe for beginners", False),
        ("", False),
    ],
)
def test_is_not_a_recipe(text, expected):
    assert is_not_a_recipe(text) is expected


def test_pancakes_block_is_removed_from_body():
    block = (
        "---RECIPE_METADATA---\n"
        "NAME: Pancakes\n"
        "TIME_MINUTES: 20\n"
        "SERVES_PEOPLE: 4\n"
        "MAKES_ITEMS: N/A\n"
        "---END_METADATA---"
    )
    metadata, body = parse_recipe_metadata(block + "\n\n# Pancakes\n\nWhisk and fry.")
    assert (metadata.name, metadata.time_minutes, metadata.serves_people, metadata.makes_items) == (
        "Pancakes",
        20,
        4,
        "N/A",
    )
    assert block not in body
    assert body == "# Pancakes\n\nWhisk and fry."
