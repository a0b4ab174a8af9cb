from fastapi import APIRouter

from recipe_extractor.app.api.routes import extractor, health

api_router = APIRouter()
api_router.include_router(extractor.router)
api_router.include_router(health.router)
