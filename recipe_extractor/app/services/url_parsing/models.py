"""Pydantic models for URL classification and page cleanup."""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

SocialProviderKey = Literal["tiktok", "instagram", "facebook", "pinterest", "x"]


class SocialProviderMatch(BaseModel):
    """Result of matching a URL against the known social hosts."""

    model_config = ConfigDict(frozen=True)

    is_social: bool
    provider: Optional[SocialProviderKey] = None
    display_name: Optional[str] = None


class UrlClassification(BaseModel):
    """What the pipeline needs to know about a raw input string."""

    model_config = ConfigDict(frozen=True)

    is_url: bool
    is_social: bool = False
    provider: Optional[SocialProviderKey] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class CleanHtmlOptions:
    """Flags for clean_html; every cleanup step is on by default."""

    remove_attributes: bool = True
    remove_empty_elements: bool = True
    normalize_whitespace: bool = True
    remove_comments: bool = True
    convert_to_markdown: bool = False
