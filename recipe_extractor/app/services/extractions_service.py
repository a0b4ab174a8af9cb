import logging

from sqlalchemy.orm import Session

from recipe_extractor.app.db import models
from recipe_extractor.app.schemas.extractor import ExtractionResult

logger = logging.getLogger(__name__)


def map_result_to_record(result: ExtractionResult, user_id: str) -> models.ExtractedRecipe:
    """Flatten an assembled result into a row; empty values are stored as NULL."""
    units = result.units.model_dump(exclude_none=True)
    return models.ExtractedRecipe(
        user_id=user_id,
        recipe_data=result.recipe_data or None,
        image_url=result.image_url or None,
        is_url=result.is_url,
        is_recipe=result.is_recipe,
        is_social=result.is_social or None,
        provider=result.provider or None,
        original_url=result.original_url or None,
        recipe_name=result.recipe_name or None,
        time_minutes=result.time_minutes or None,
        serves_people=result.serves_people or None,
        makes_items=result.makes_items or None,
        language_code=result.language_code or None,
        units=units or None,
    )


def save_extraction(db: Session, result: ExtractionResult, user_id: str) -> models.ExtractedRecipe:
    record = map_result_to_record(result, user_id)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Extraction saved with id %s for user %s", record.id, user_id)
    return record
