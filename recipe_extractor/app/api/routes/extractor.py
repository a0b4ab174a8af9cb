import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recipe_extractor.app.api.deps import get_db_session, get_optional_user, get_pipeline
from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.schemas.auth import CurrentUser
from recipe_extractor.app.schemas.extractor import RecipeExtractorRequest, RecipeExtractorResponse
from recipe_extractor.app.services import extractions_service
from recipe_extractor.app.services.pipeline.orchestrator import PipelineOrchestrator
from recipe_extractor.app.services.units_parser import construct_units_string

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recipe-extractor"])

MISSING_URL_MESSAGE = "Missing required field: url"


def _missing_url() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": MISSING_URL_MESSAGE})


async def _read_payload(request: Request) -> Optional[RecipeExtractorRequest]:
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        return RecipeExtractorRequest.model_validate(body)
    except ValidationError:
        return None


@router.post("/recipe-extractor", response_model=RecipeExtractorResponse, response_model_exclude_none=True)
async def extract_recipe(
    request: Request,
    pipeline: PipelineOrchestrator = Depends(get_pipeline),
    db: Session = Depends(get_db_session),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    payload = await _read_payload(request)
    if payload is None or not (payload.url or "").strip():
        return _missing_url()

    units = construct_units_string(
        weight=payload.weight_unit,
        liquid=payload.liquid_unit,
        length=payload.length_unit,
        temperature=payload.temperature_unit,
    )
    logger.info("Running recipe extraction for %s (language=%s, units=%s)", payload.url, payload.language, units)

    try:
        result = await pipeline.run(payload.url, language=payload.language, units=units)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Recipe extraction error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to extract recipe", "message": str(exc) or exc.__class__.__name__},
        )

    response = RecipeExtractorResponse(**result.model_dump())
    if current_user is not None and get_settings().persist_extractions:
        try:
            record = extractions_service.save_extraction(db, result, current_user.id)
            response.saved_recipe_id = record.id
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Failed to save extraction for user %s: %s", current_user.id, exc)
    return response
