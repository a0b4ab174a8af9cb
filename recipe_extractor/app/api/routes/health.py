from datetime import datetime, timezone

from fastapi import APIRouter

from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.schemas.extractor import HealthRead

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthRead)
async def health() -> HealthRead:
    return HealthRead(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=get_settings().app_version,
    )
