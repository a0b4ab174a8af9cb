"""Staged recipe extraction pipeline."""

from recipe_extractor.app.services.pipeline.orchestrator import (
    PipelineOrchestrator,
    get_orchestrator,
    run_pipeline,
)
from recipe_extractor.app.services.pipeline.state import (
    ErrorState,
    NormalState,
    PipelineRequest,
    PipelineState,
    SocialState,
)

__all__ = [
    "ErrorState",
    "NormalState",
    "PipelineOrchestrator",
    "PipelineRequest",
    "PipelineState",
    "SocialState",
    "get_orchestrator",
    "run_pipeline",
]
