import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_version: str = Field("1.0.0", alias="APP_VERSION")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    database_url: str = Field("sqlite:///./recipe_extractor.db", alias="DATABASE_URL")
    auth_secret_key: str = Field("change-me", alias="AUTH_SECRET_KEY")
    auth_algorithm: str = Field("HS256", alias="AUTH_ALGORITHM")
    auth_required: bool = Field(False, alias="AUTH_REQUIRED")
    persist_extractions: bool = Field(True, alias="PERSIST_EXTRACTIONS")
    llm_base_url: str | None = Field(None, alias="LLM_BASE_URL")
    llm_app_id: str | None = Field(None, alias="LLM_APP_ID")
    llm_app_key: str | None = Field(None, alias="LLM_APP_KEY")
    llm_recipe_model_name: str = Field("full", alias="LLM_RECIPE_MODEL_NAME")
    llm_image_model_name: str = Field("lightweight", alias="LLM_IMAGE_MODEL_NAME")
    llm_max_tokens: int = Field(4000, alias="LLM_MAX_TOKENS")
    extraction_timeout_seconds: float = Field(90.0, alias="EXTRACTION_TIMEOUT_SECONDS")
    fetch_timeout_seconds: float = Field(15.0, alias="FETCH_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_cookies: str | None = Field(None, alias="SCRAPER_COOKIES")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
