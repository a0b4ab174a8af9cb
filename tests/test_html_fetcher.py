import httpx
import pytest

from recipe_extractor.app.services.errors import FetchError
from recipe_extractor.app.services.url_parsing import html_fetcher


def patch_client(monkeypatch, handler, seen=None):
    transport = httpx.MockTransport(handler)
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        if seen is not None:
            seen.update(kwargs)
        kwargs.pop("transport", None)
        return real_client(*args, transport=transport, **kwargs)

    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", client_factory)


@pytest.mark.asyncio
async def test_fetch_returns_body(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["user-agent"]
        assert request.headers["accept"].startswith("text/html")
        return httpx.Response(200, text="<html><body>ok</body></html>")

    seen = {}
    patch_client(monkeypatch, handler, seen)
    html = await html_fetcher.fetch_html("https://example.com/recipe")
    assert html == "<html><body>ok</body></html>"
    assert seen["follow_redirects"] is True


@pytest.mark.asyncio
async def test_fetch_follows_redirects(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"location": "https://example.com/new"})
        return httpx.Response(200, text="moved here")

    patch_client(monkeypatch, handler)
    assert await html_fetcher.fetch_html("https://example.com/old") == "moved here"


@pytest.mark.asyncio
async def test_fetch_raises_on_bad_status(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    patch_client(monkeypatch, handler)
    with pytest.raises(FetchError) as exc_info:
        await html_fetcher.fetch_html("https://example.com/missing")
    assert exc_info.value.status_code == 404
    assert exc_info.value.describe() == "Failed to fetch URL: 404 Not Found"


@pytest.mark.asyncio
async def test_fetch_wraps_transport_errors(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    patch_client(monkeypatch, handler)
    with pytest.raises(FetchError) as exc_info:
        await html_fetcher.fetch_html("https://example.com/down")
    assert exc_info.value.status_code is None
    assert exc_info.value.describe() == "Error fetching URL: connection refused"


@pytest.mark.asyncio
async def test_fetch_timeout(monkeypatch):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    patch_client(monkeypatch, handler)
    with pytest.raises(FetchError) as exc_info:
        await html_fetcher.fetch_html("https://example.com/slow")
    assert exc_info.value.describe() == "Error fetching URL: Timed out fetching URL"


def test_invalid_cookie_setting_is_ignored(monkeypatch):
    settings = html_fetcher.get_settings()
    monkeypatch.setattr(settings, "scraper_cookies", "{not json")
    assert html_fetcher._request_cookies() == {}
    monkeypatch.setattr(settings, "scraper_cookies", '{"session": "abc"}')
    assert html_fetcher._request_cookies() == {"session": "abc"}
