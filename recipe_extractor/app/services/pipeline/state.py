"""Route-tagged state threaded through the extraction pipeline.

Each request gets one state value. It is one of three frozen variants,
``NormalState``, ``SocialState`` or ``ErrorState``, discriminated by
``route``. Stages return a new value instead of mutating: ``advance`` for
additive updates, ``to_error`` to leave the normal route while keeping every
field computed so far.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from recipe_extractor.app.services.errors import ErrorKind
from recipe_extractor.app.services.recipe_metadata import RecipeMetadata
from recipe_extractor.app.services.units_parser import ResolvedUnits
from recipe_extractor.app.services.url_parsing.models import SocialProviderKey


class PipelineRequest(BaseModel):
    """The untouched inputs of one pipeline run."""

    model_config = ConfigDict(frozen=True)

    raw_input: str
    language_request: Optional[str] = None
    units_request: Optional[str] = None


class StateBase(PipelineRequest):
    original_url: Optional[str] = None
    result: str = ""
    is_url: bool = False
    is_social: bool = False
    is_recipe: bool = False
    image_url: Optional[str] = None
    resolved_units: ResolvedUnits = Field(default_factory=ResolvedUnits)
    language_code: Optional[str] = None

    def common_fields(self) -> dict:
        return {name: getattr(self, name) for name in StateBase.model_fields}

    def advance(self, **changes):
        return self.model_copy(update=changes)

    def to_error(
        self, kind: ErrorKind, result: str, status_code: Optional[int] = None
    ) -> "ErrorState":
        fields = self.common_fields()
        fields.update(result=result, is_recipe=False)
        return ErrorState(**fields, error_kind=kind, status_code=status_code)


class NormalState(StateBase):
    route: Literal["normal"] = "normal"
    html_content: Optional[str] = None
    cleaned_content: Optional[str] = None
    recipe_data: Optional[str] = None
    metadata: RecipeMetadata = Field(default_factory=RecipeMetadata)


class SocialState(StateBase):
    route: Literal["social"] = "social"
    provider: str
    provider_key: SocialProviderKey


class ErrorState(StateBase):
    route: Literal["error"] = "error"
    error_kind: ErrorKind
    status_code: Optional[int] = None


PipelineState = Annotated[
    Union[NormalState, SocialState, ErrorState], Field(discriminator="route")
]
