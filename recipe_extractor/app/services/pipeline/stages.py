"""Pipeline stages.

Every stage after the route decision takes a state and returns a state.
Non-normal states pass through untouched, and each stage converts its own
failures into an error route instead of raising.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from recipe_extractor.app.schemas.extractor import ExtractionResult, UnitsRead
from recipe_extractor.app.services.errors import (
    ErrorKind,
    FetchError,
    RecipeExtractorError,
    SanitizationError,
)
from recipe_extractor.app.services.extraction_client import NO_IMAGE_FOUND, ExtractionCollaborator
from recipe_extractor.app.services.language_resolver import get_language_iso_code
from recipe_extractor.app.services.pipeline.state import (
    ErrorState,
    NormalState,
    PipelineRequest,
    PipelineState,
    SocialState,
)
from recipe_extractor.app.services.recipe_metadata import (
    NOT_A_RECIPE,
    is_not_a_recipe,
    parse_recipe_metadata,
)
from recipe_extractor.app.services.units_parser import resolve_units
from recipe_extractor.app.services.url_parsing.html_cleaner import clean_html
from recipe_extractor.app.services.url_parsing.models import CleanHtmlOptions, UrlClassification
from recipe_extractor.app.services.url_parsing.url_classifier import classify_url, is_valid_url

logger = logging.getLogger(__name__)

NOT_A_URL = "this is not a url"

_MARKDOWN_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(\s*([^)\s]+)")

Fetcher = Callable[[str], Awaitable[str]]


@dataclass
class PipelineContext:
    fetcher: Fetcher
    collaborator: Optional[ExtractionCollaborator] = None
    fetch_timeout: float = 15.0
    extraction_timeout: float = 90.0


def classify(request: PipelineRequest) -> UrlClassification:
    return classify_url(request.raw_input)


def decide_route(request: PipelineRequest, classification: UrlClassification) -> PipelineState:
    fields = request.model_dump()
    url = request.raw_input.strip()
    if not classification.is_url:
        return ErrorState(
            **fields,
            result=NOT_A_URL,
            error_kind=ErrorKind.INVALID_INPUT,
        )
    if classification.is_social:
        return SocialState(
            **fields,
            result=f"this url is from {classification.display_name}",
            is_url=True,
            is_social=True,
            original_url=url,
            provider=classification.display_name,
            provider_key=classification.provider,
        )
    return NormalState(
        **fields,
        result="continue_processing",
        is_url=True,
        original_url=url,
    )


async def fetch_content(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    if not isinstance(state, NormalState):
        return state
    if not state.original_url:
        return state.to_error(ErrorKind.NETWORK_FAILURE, "Invalid state for HTML fetching")

    try:
        html = await asyncio.wait_for(ctx.fetcher(state.original_url), timeout=ctx.fetch_timeout)
    except FetchError as exc:
        return state.to_error(ErrorKind.NETWORK_FAILURE, exc.describe(), status_code=exc.status_code)
    except asyncio.TimeoutError:
        return state.to_error(
            ErrorKind.NETWORK_FAILURE, FetchError(message="Timed out fetching URL").describe()
        )
    return state.advance(html_content=html, result="html_fetched")


def clean_and_convert(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    if not isinstance(state, NormalState) or state.html_content is None:
        return state
    try:
        markdown = clean_html(state.html_content, CleanHtmlOptions(convert_to_markdown=True))
    except SanitizationError as exc:
        return state.to_error(ErrorKind.SANITIZATION_FAILURE, f"Error cleaning HTML: {exc}")
    return state.advance(cleaned_content=markdown, result="html_cleaned")


def parse_units(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    if not isinstance(state, NormalState) or not state.cleaned_content:
        return state
    return state.advance(
        resolved_units=resolve_units(state.units_request),
        language_code=get_language_iso_code(state.language_request),
        result="units_parsed",
    )


def _image_url_from_response(text: str) -> Optional[str]:
    candidate = (text or "").strip().strip("`").strip()
    if not candidate or candidate.lower().strip(".") == NO_IMAGE_FOUND:
        return None
    match = _MARKDOWN_IMAGE_RE.search(candidate)
    if match:
        candidate = match.group(1)
    return candidate if is_valid_url(candidate) else None


async def extract_image(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    if not isinstance(state, NormalState) or not state.cleaned_content:
        return state
    if ctx.collaborator is None:
        return state.advance(image_url=None)
    try:
        response = await asyncio.wait_for(
            ctx.collaborator.extract_image(state.cleaned_content), timeout=ctx.extraction_timeout
        )
    except (RecipeExtractorError, httpx.HTTPError, asyncio.TimeoutError) as exc:
        logger.warning("Image extraction failed for %s: %s", state.original_url, str(exc) or "timed out")
        return state.advance(image_url=None)

    image_url = _image_url_from_response(response)
    return state.advance(
        image_url=image_url,
        result="image_extracted" if image_url else "no_image_found",
    )


async def extract_recipe(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    if not isinstance(state, NormalState):
        return state
    if not state.cleaned_content:
        return state.advance(is_recipe=False, result=NOT_A_RECIPE)
    if ctx.collaborator is None:
        return state.to_error(
            ErrorKind.EXTRACTION_DEGRADED,
            "Error extracting recipe: extraction service is not configured",
        )

    try:
        response = await asyncio.wait_for(
            ctx.collaborator.extract_recipe(
                state.cleaned_content, state.language_request, state.units_request
            ),
            timeout=ctx.extraction_timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("Recipe extraction timed out for %s", state.original_url)
        return state.to_error(ErrorKind.EXTRACTION_DEGRADED, "Error extracting recipe: timed out")
    except (RecipeExtractorError, httpx.HTTPError) as exc:
        logger.warning("Recipe extraction failed for %s: %s", state.original_url, exc)
        return state.to_error(ErrorKind.EXTRACTION_DEGRADED, f"Error extracting recipe: {exc}")

    extracted = (response or "").strip()
    if not extracted or is_not_a_recipe(extracted):
        return state.advance(is_recipe=False, result=extracted or NOT_A_RECIPE)

    metadata, body = parse_recipe_metadata(extracted)
    return state.advance(
        is_recipe=True,
        result=extracted,
        recipe_data=body,
        metadata=metadata,
    )


def assemble(state: PipelineState) -> ExtractionResult:
    """Flatten a finished state into the response shape, dropping the route."""
    units = state.resolved_units
    result = ExtractionResult(
        result=state.result,
        image_url=state.image_url,
        is_url=state.is_url,
        is_recipe=state.is_recipe,
        is_social=state.is_social,
        original_url=state.original_url,
        language=state.language_request,
        language_code=state.language_code,
        units=UnitsRead(
            length=units.length,
            liquid=units.liquid,
            weight=units.weight,
            temperature=units.temperature,
        ),
    )
    if isinstance(state, SocialState):
        result.provider = state.provider
    if isinstance(state, NormalState) and state.is_recipe:
        result.recipe_data = state.recipe_data
        result.recipe_name = state.metadata.name
        result.time_minutes = state.metadata.time_minutes
        result.serves_people = state.metadata.serves_people
        result.makes_items = state.metadata.makes_items
    return result
