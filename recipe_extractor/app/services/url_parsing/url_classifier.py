"""Decide whether an input is a URL and whether it points at a social platform."""

import re
from typing import Tuple
from urllib.parse import urlsplit, urlunsplit

from recipe_extractor.app.services.url_parsing.models import (
    SocialProviderMatch,
    UrlClassification,
)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Checked in order; the first provider with a matching host fragment wins.
SOCIAL_PROVIDERS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("tiktok", "TikTok", ("tiktok.com",)),
    ("instagram", "Instagram", ("instagram.com",)),
    ("facebook", "Facebook", ("facebook.com", "fb.com")),
    ("pinterest", "Pinterest", ("pinterest.com", "pin.it")),
    ("x", "X (Twitter)", ("twitter.com", "x.com", "t.co")),
)


def is_valid_url(value: str) -> bool:
    """True when the value is an absolute URL with both a scheme and a host."""
    if not value or not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        # Accessing .port validates the port component
        parts.port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    return bool(parts.netloc and hostname)


def _normalized_hostname(url: str) -> str:
    hostname = (urlsplit(url.strip()).hostname or "").lower()
    return re.sub(r"^www\.", "", hostname)


def detect_social_provider(url: str) -> SocialProviderMatch:
    try:
        hostname = _normalized_hostname(url)
    except ValueError:
        return SocialProviderMatch(is_social=False)
    if not hostname:
        return SocialProviderMatch(is_social=False)

    for key, display_name, fragments in SOCIAL_PROVIDERS:
        if any(fragment in hostname for fragment in fragments):
            return SocialProviderMatch(is_social=True, provider=key, display_name=display_name)
    return SocialProviderMatch(is_social=False)


def classify_url(value: str) -> UrlClassification:
    """Classify a raw input string. Never raises."""
    if not is_valid_url(value):
        return UrlClassification(is_url=False)
    social = detect_social_provider(value)
    if social.is_social:
        return UrlClassification(
            is_url=True,
            is_social=True,
            provider=social.provider,
            display_name=social.display_name,
        )
    return UrlClassification(is_url=True)


def strip_query(url: str) -> str:
    """Drop the query string (and fragment) from a URL, for log lines."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url.split("?", 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
