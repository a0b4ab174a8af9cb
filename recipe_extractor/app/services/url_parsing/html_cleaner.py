"""String-based HTML cleanup.

Removes scripts, styles and noscript blocks, strips comments and attributes
(``img`` keeps ``src`` and ``alt``), normalizes whitespace and drops empty
elements. Everything is done with regular expressions rather than a parse
tree; it is a best-effort cleanup of arbitrary pages ahead of markdown
conversion, not an HTML validator.
"""

import logging
import re
from typing import Optional

from recipe_extractor.app.services.errors import SanitizationError
from recipe_extractor.app.services.url_parsing.markdown_converter import convert_html_to_markdown
from recipe_extractor.app.services.url_parsing.models import CleanHtmlOptions

logger = logging.getLogger(__name__)

TAGS_TO_REMOVE = ("script", "style", "noscript")

VOID_ELEMENTS = (
    "img",
    "br",
    "hr",
    "input",
    "meta",
    "link",
    "area",
    "base",
    "col",
    "embed",
    "source",
    "track",
    "wbr",
)

_PAIRED_TAG_PATTERNS = tuple(
    re.compile(rf"<{tag}\b[^>]*>.*?</{tag}\s*>", re.I | re.S) for tag in TAGS_TO_REMOVE
)
_SELF_CLOSING_TAG_PATTERNS = tuple(
    re.compile(rf"<{tag}\b[^>]*/>", re.I) for tag in TAGS_TO_REMOVE
)
_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_OPEN_TAG_RE = re.compile(r"<([a-zA-Z][a-zA-Z0-9]*)[^>]*>")
_ATTR_VALUE = r"""\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+?)(?=\s|/?>))"""
_SRC_RE = re.compile(r"(?<![\w-])src" + _ATTR_VALUE, re.I)
_ALT_RE = re.compile(r"(?<![\w-])alt" + _ATTR_VALUE, re.I)
_EMPTY_ELEMENT_RE = re.compile(
    r"<(?!(?:" + "|".join(VOID_ELEMENTS) + r")\b)([a-zA-Z][a-zA-Z0-9]*)\b[^>]*>\s*</\1\s*>",
    re.I,
)


def clean_html(html: str, options: Optional[CleanHtmlOptions] = None) -> str:
    """Clean an HTML document; returns HTML, or markdown when requested.

    Steps run in a fixed order: unwanted tags, comments, attributes,
    whitespace, empty elements. Whitespace has to be normalized before the
    emptiness check so that whitespace-only elements count as empty.
    """
    opts = options or CleanHtmlOptions()
    try:
        cleaned = remove_unwanted_tags(html or "")
        if opts.remove_comments:
            cleaned = remove_html_comments(cleaned)
        if opts.remove_attributes:
            cleaned = remove_all_attributes(cleaned)
        if opts.normalize_whitespace:
            cleaned = normalize_whitespace(cleaned)
        if opts.remove_empty_elements:
            cleaned = remove_empty_elements(cleaned, renormalize=opts.normalize_whitespace)
        if opts.convert_to_markdown:
            return convert_html_to_markdown(cleaned)
        return cleaned
    except SanitizationError:
        raise
    except (re.error, RecursionError, TypeError, ValueError) as exc:
        logger.warning("HTML cleanup failed: %s", exc)
        raise SanitizationError(str(exc)) from exc


def remove_unwanted_tags(html: str) -> str:
    result = html
    for paired, self_closing in zip(_PAIRED_TAG_PATTERNS, _SELF_CLOSING_TAG_PATTERNS):
        result = paired.sub("", result)
        result = self_closing.sub("", result)
    return result


def remove_html_comments(html: str) -> str:
    return _COMMENT_RE.sub("", html)


def _attribute_value(pattern: re.Pattern, tag: str) -> Optional[str]:
    match = pattern.search(tag)
    if not match:
        return None
    value = next(group for group in match.groups() if group is not None)
    return value.replace('"', "&quot;")


def _strip_tag_attributes(match: re.Match) -> str:
    tag_name = match.group(1)
    if tag_name.lower() == "img":
        # Attribute values are searched after the tag name only
        attrs_text = match.group(0)[len(tag_name) + 1 :]
        src = _attribute_value(_SRC_RE, attrs_text)
        alt = _attribute_value(_ALT_RE, attrs_text)
        attributes = ""
        if src is not None:
            attributes += f' src="{src}"'
        if alt is not None:
            attributes += f' alt="{alt}"'
        if attributes:
            return f"<{tag_name}{attributes} />"
    return f"<{tag_name}>"


def remove_all_attributes(html: str) -> str:
    """Drop every attribute except ``src``/``alt`` on images."""
    return _OPEN_TAG_RE.sub(_strip_tag_attributes, html)


def normalize_whitespace(html: str) -> str:
    result = re.sub(r"\s+", " ", html)
    result = re.sub(r">\s+<", "><", result)
    return result.strip()


def remove_empty_elements(html: str, renormalize: bool = True) -> str:
    """Remove childless, textless elements until nothing else changes.

    Removing an inner element can empty its parent, so this loops to a fixed
    point. Void elements (images included) are never removed.
    """
    result = html
    while True:
        updated = _EMPTY_ELEMENT_RE.sub("", result)
        if renormalize:
            updated = normalize_whitespace(updated)
        if updated == result:
            return result
        result = updated
