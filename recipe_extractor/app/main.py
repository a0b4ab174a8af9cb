import logging

from fastapi import FastAPI

from recipe_extractor.app.api.routes import api_router
from recipe_extractor.app.core.config import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Recipe Extractor", version=settings.app_version)
    app.include_router(api_router)

    @app.on_event("startup")
    async def startup_event() -> None:
        if settings.llm_base_url:
            logger.info("Extraction service configured at %s", settings.llm_base_url)
        else:
            logger.warning("LLM_BASE_URL is not set; recipe extraction will report a degraded result")

    return app


app = create_app()
