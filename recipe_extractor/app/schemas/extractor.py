from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecipeExtractorRequest(CamelModel):
    url: Optional[str] = None
    language: Optional[str] = None
    weight_unit: Optional[str] = None
    length_unit: Optional[str] = None
    liquid_unit: Optional[str] = None
    temperature_unit: Optional[str] = None


class UnitsRead(CamelModel):
    length: Optional[str] = None
    liquid: Optional[str] = None
    weight: Optional[str] = None
    temperature: Optional[str] = None


class ExtractionResult(CamelModel):
    """Assembled pipeline output, without internal routing fields."""

    result: str
    recipe_data: Optional[str] = None
    image_url: Optional[str] = None
    is_url: bool
    is_recipe: bool
    is_social: Optional[bool] = None
    provider: Optional[str] = None
    original_url: Optional[str] = None
    recipe_name: Optional[str] = None
    time_minutes: Optional[int] = None
    serves_people: Optional[int] = None
    makes_items: Optional[str] = None
    language: Optional[str] = None
    language_code: Optional[str] = None
    units: UnitsRead = Field(default_factory=UnitsRead)


class RecipeExtractorResponse(ExtractionResult):
    saved_recipe_id: Optional[str] = None


class HealthRead(BaseModel):
    status: str
    timestamp: str
    version: str
