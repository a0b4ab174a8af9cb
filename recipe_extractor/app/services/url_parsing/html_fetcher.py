"""HTML fetching for the normal extraction route."""

import json
import logging
from typing import Optional

import httpx

from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.services.errors import FetchError
from recipe_extractor.app.services.url_parsing.url_classifier import strip_query

logger = logging.getLogger(__name__)


def _request_headers() -> dict:
    settings = get_settings()
    return {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Connection": "keep-alive",
    }


def _request_cookies() -> dict:
    settings = get_settings()
    if not settings.scraper_cookies:
        return {}
    try:
        cookies = json.loads(settings.scraper_cookies)
    except json.JSONDecodeError:
        logger.warning("SCRAPER_COOKIES is not valid JSON; ignoring it")
        return {}
    return cookies if isinstance(cookies, dict) else {}


async def fetch_html(url: str, timeout: Optional[float] = None) -> str:
    """GET the page once and return its body.

    Raises FetchError for non-2xx responses, timeouts and transport errors.
    Redirects are followed; nothing is retried.
    """
    settings = get_settings()
    seconds = timeout if timeout is not None else settings.fetch_timeout_seconds
    client_timeout = httpx.Timeout(seconds, connect=min(seconds, 5.0))

    try:
        async with httpx.AsyncClient(
            timeout=client_timeout,
            follow_redirects=True,
            headers=_request_headers(),
            cookies=_request_cookies(),
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching %s: %s", strip_query(url), exc)
        raise FetchError(message="Timed out fetching URL") from exc
    except httpx.HTTPError as exc:
        logger.warning("Network error fetching %s: %s", strip_query(url), exc)
        raise FetchError(message=str(exc) or exc.__class__.__name__) from exc
    except (httpx.InvalidURL, ValueError) as exc:
        # httpx rejects some URLs that urlsplit accepts; idna errors are ValueErrors
        logger.warning("Rejected URL %r: %s", strip_query(url), exc)
        raise FetchError(message=str(exc) or exc.__class__.__name__) from exc

    if not response.is_success:
        logger.info(
            "Fetch of %s returned status %s", strip_query(url), response.status_code
        )
        raise FetchError(
            status_code=response.status_code,
            status_text=response.reason_phrase,
        )

    return response.text
