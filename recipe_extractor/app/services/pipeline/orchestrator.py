import inspect
import logging
from typing import Optional

from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.schemas.extractor import ExtractionResult
from recipe_extractor.app.services.extraction_client import (
    ExtractionCollaborator,
    get_extraction_client,
)
from recipe_extractor.app.services.pipeline import stages
from recipe_extractor.app.services.pipeline.state import PipelineRequest, PipelineState
from recipe_extractor.app.services.url_parsing.html_fetcher import fetch_html
from recipe_extractor.app.services.url_parsing.url_classifier import strip_query

logger = logging.getLogger(__name__)

# Runs strictly in this order after the route decision.
STAGES = (
    ("fetch", stages.fetch_content),
    ("clean_and_convert", stages.clean_and_convert),
    ("parse_units", stages.parse_units),
    ("extract_image", stages.extract_image),
    ("extract_recipe", stages.extract_recipe),
)


class PipelineOrchestrator:
    """Runs one request through classify, route and the staged extraction."""

    def __init__(
        self,
        collaborator: Optional[ExtractionCollaborator] = None,
        fetcher: Optional[stages.Fetcher] = None,
        fetch_timeout: Optional[float] = None,
        extraction_timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.context = stages.PipelineContext(
            fetcher=fetcher or fetch_html,
            collaborator=collaborator,
            fetch_timeout=fetch_timeout if fetch_timeout is not None else settings.fetch_timeout_seconds,
            extraction_timeout=(
                extraction_timeout if extraction_timeout is not None else settings.extraction_timeout_seconds
            ),
        )

    async def run_state(self, request: PipelineRequest) -> PipelineState:
        classification = stages.classify(request)
        state = stages.decide_route(request, classification)
        logger.info(
            "Routed input %s to %s", strip_query(request.raw_input)[:200], state.route
        )
        for name, stage in STAGES:
            outcome = stage(state, self.context)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if outcome.route != state.route:
                logger.info("Stage %s moved route %s -> %s: %s", name, state.route, outcome.route, outcome.result[:200])
            else:
                logger.debug("Stage %s done (route=%s, result=%s)", name, outcome.route, outcome.result[:80])
            state = outcome
        return state

    async def run(
        self,
        raw_input: str,
        language: Optional[str] = None,
        units: Optional[str] = None,
    ) -> ExtractionResult:
        request = PipelineRequest(raw_input=raw_input, language_request=language, units_request=units)
        state = await self.run_state(request)
        return stages.assemble(state)


def get_orchestrator() -> PipelineOrchestrator:
    return PipelineOrchestrator(collaborator=get_extraction_client())


async def run_pipeline(
    raw_input: str,
    language: Optional[str] = None,
    units: Optional[str] = None,
    *,
    collaborator: Optional[ExtractionCollaborator] = None,
    fetcher: Optional[stages.Fetcher] = None,
) -> ExtractionResult:
    """Run one input through the pipeline.

    Without overrides the configured fetcher and extraction client are used.
    """
    if collaborator is None and fetcher is None:
        orchestrator = get_orchestrator()
    else:
        orchestrator = PipelineOrchestrator(
            collaborator=collaborator if collaborator is not None else get_extraction_client(),
            fetcher=fetcher,
        )
    return await orchestrator.run(raw_input, language, units)
