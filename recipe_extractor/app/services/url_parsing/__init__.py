"""URL handling for recipe extraction.

Classifies raw input, fetches pages and turns their HTML into markdown that
the extraction model can read.
"""

from recipe_extractor.app.services.url_parsing.html_cleaner import (
    clean_html,
    normalize_whitespace,
    remove_all_attributes,
    remove_empty_elements,
    remove_html_comments,
    remove_unwanted_tags,
)
from recipe_extractor.app.services.url_parsing.html_fetcher import fetch_html
from recipe_extractor.app.services.url_parsing.markdown_converter import (
    convert_html_to_markdown,
    convert_html_to_markdown_with_options,
)
from recipe_extractor.app.services.url_parsing.models import (
    CleanHtmlOptions,
    SocialProviderMatch,
    UrlClassification,
)
from recipe_extractor.app.services.url_parsing.url_classifier import (
    classify_url,
    detect_social_provider,
    is_valid_url,
    strip_query,
)

__all__ = [
    # Models
    "CleanHtmlOptions",
    "SocialProviderMatch",
    "UrlClassification",
    # Classification
    "classify_url",
    "detect_social_provider",
    "is_valid_url",
    "strip_query",
    # HTML fetching
    "fetch_html",
    # Cleanup
    "clean_html",
    "normalize_whitespace",
    "remove_all_attributes",
    "remove_empty_elements",
    "remove_html_comments",
    "remove_unwanted_tags",
    # Markdown
    "convert_html_to_markdown",
    "convert_html_to_markdown_with_options",
]
