import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from recipe_extractor.app.db.base import Base


class ExtractedRecipe(Base):
    """Flattened copy of one assembled extraction result."""

    __tablename__ = "extracted_recipes"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    recipe_data = Column(Text)
    image_url = Column(String)
    is_url = Column(Boolean, nullable=False, default=False)
    is_recipe = Column(Boolean, nullable=False, default=False)
    is_social = Column(Boolean)
    provider = Column(String)
    original_url = Column(String)
    recipe_name = Column(String)
    time_minutes = Column(Integer)
    serves_people = Column(Integer)
    makes_items = Column(String)
    language_code = Column(String)
    units = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
