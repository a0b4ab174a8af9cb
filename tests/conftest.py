import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from recipe_extractor.app.api.deps import get_db_session, get_pipeline
from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.db import models  # noqa: F401
from recipe_extractor.app.db.base import Base
from recipe_extractor.app.main import create_app
from recipe_extractor.app.services.pipeline.orchestrator import PipelineOrchestrator

RECIPE_RESPONSE = """---RECIPE_METADATA---
NAME: Tomato Soup
TIME_MINUTES: 35
SERVES_PEOPLE: 4
MAKES_ITEMS: N/A
LANGUAGE: N/A
UNITS_LENGTH: N/A
UNITS_LIQUID: ml
UNITS_WEIGHT: grams
---END_METADATA---

# Tomato Soup

**Serves:** 4 people

- 500 grams tomatoes
- 250 ml stock
"""

RECIPE_PAGE = """
<html>
  <head><title>Soup</title><script>track()</script><style>p {}</style></head>
  <body>
    <!-- nav -->
    <div class="wrap"><span> </span></div>
    <h1 id="title">Tomato Soup</h1>
    <img src="https://cdn.example.com/soup.jpg" alt="A bowl of soup" class="hero">
    <ul><li>500g tomatoes</li><li>1 cup stock</li></ul>
  </body>
</html>
"""


class FakeCollaborator:
    """In-memory extraction collaborator that records what it was asked."""

    def __init__(self, recipe=RECIPE_RESPONSE, image="https://cdn.example.com/soup.jpg", recipe_error=None, image_error=None):
        self.recipe = recipe
        self.image = image
        self.recipe_error = recipe_error
        self.image_error = image_error
        self.recipe_calls = []
        self.image_calls = []

    async def extract_recipe(self, markdown, language=None, units=None):
        self.recipe_calls.append((markdown, language, units))
        if self.recipe_error is not None:
            raise self.recipe_error
        return self.recipe

    async def extract_image(self, markdown):
        self.image_calls.append(markdown)
        if self.image_error is not None:
            raise self.image_error
        return self.image


class FakeFetcher:
    def __init__(self, html=RECIPE_PAGE, error=None):
        self.html = html
        self.error = error
        self.calls = []

    async def __call__(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture(scope="session")
def engine():
    engine = create_engine("sqlite+pysqlite:///:memory:", connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(bind=connection, autocommit=False, autoflush=False, future=True)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def collaborator():
    return FakeCollaborator()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def orchestrator(collaborator, fetcher):
    return PipelineOrchestrator(collaborator=collaborator, fetcher=fetcher, fetch_timeout=5, extraction_timeout=5)


@pytest.fixture
def app(db_session, orchestrator):
    app = create_app()

    def override_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_pipeline] = lambda: orchestrator
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_settings():
    return get_settings()


def make_token(user_id: str, email: str, settings) -> str:
    payload = {"sub": str(user_id), "email": email}
    return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)


@pytest.fixture
def user_token(auth_settings):
    return make_token("user-1", "user1@example.com", auth_settings)
