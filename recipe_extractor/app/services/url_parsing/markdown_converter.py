"""HTML to markdown rendering on top of markdownify."""

import re

from markdownify import ATX, MarkdownConverter

MAX_CONSECUTIVE_NEWLINES = 3

DEFAULT_MARKDOWN_OPTIONS = {
    "heading_style": ATX,
    "bullets": "-",
    "strong_em_symbol": "*",
    "code_language": "",
}


class RecipeMarkdownConverter(MarkdownConverter):
    """Converter that always renders images as ``![alt](src)``."""

    def convert_img(self, el, text, *args, **kwargs):
        alt = el.attrs.get("alt", None) or ""
        src = el.attrs.get("src", None) or ""
        if not src:
            return alt
        return f"![{alt}]({src})"


def _collapse_newlines(markdown: str) -> str:
    limit = MAX_CONSECUTIVE_NEWLINES
    return re.sub(r"\n{%d,}" % (limit + 1), "\n" * limit, markdown).strip()


def convert_html_to_markdown(html: str) -> str:
    """Render cleaned HTML as markdown (ATX headings, ``-`` bullets, fenced code)."""
    return convert_html_to_markdown_with_options(html)


def convert_html_to_markdown_with_options(html: str, **overrides) -> str:
    options = {**DEFAULT_MARKDOWN_OPTIONS, **overrides}
    return _collapse_newlines(RecipeMarkdownConverter(**options).convert(html or ""))
