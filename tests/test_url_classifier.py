import pytest

from recipe_extractor.app.services.url_parsing import url_classifier


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com/recipes/soup",
        "http://example.com",
        "  https://example.com/padded  ",
        "ftp://files.example.com/menu.txt",
        "https://example.com:8080/path?x=1#top",
    ],
)
def test_valid_urls(value):
    assert url_classifier.is_valid_url(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "   ",
        "not a url at all",
        "example.com/recipes",
        "https://",
        "https://exa mple.com",
        "https://example.com:notaport/",
        "mailto:cook@example.com",
    ],
)
def test_invalid_urls(value):
    assert not url_classifier.is_valid_url(value)


@pytest.mark.parametrize(
    "url,provider,display_name",
    [
        ("https://www.tiktok.com/@chef/video/1", "tiktok", "TikTok"),
        ("https://instagram.com/p/abc", "instagram", "Instagram"),
        ("https://m.facebook.com/watch?v=1", "facebook", "Facebook"),
        ("https://fb.com/story", "facebook", "Facebook"),
        ("https://pin.it/xyz", "pinterest", "Pinterest"),
        ("https://www.pinterest.com/pin/1", "pinterest", "Pinterest"),
        ("https://twitter.com/chef/status/1", "x", "X (Twitter)"),
        ("https://x.com/chef/status/1", "x", "X (Twitter)"),
    ],
)
def test_detect_social_provider(url, provider, display_name):
    match = url_classifier.detect_social_provider(url)
    assert match.is_social
    assert match.provider == provider
    assert match.display_name == display_name


def test_provider_is_matched_on_host_not_path():
    match = url_classifier.detect_social_provider("https://example.com/share/tiktok.com")
    assert not match.is_social
    assert match.provider is None


def test_classify_url_never_raises_for_garbage():
    result = url_classifier.classify_url("http://[::1")
    assert not result.is_url
    assert not result.is_social


def test_classify_normal_url():
    result = url_classifier.classify_url("https://www.allrecipes.com/recipe/1")
    assert result.is_url
    assert not result.is_social
    assert result.provider is None


def test_classify_social_url():
    result = url_classifier.classify_url("https://www.instagram.com/reel/abc/")
    assert result.is_url and result.is_social
    assert result.provider == "instagram"
    assert result.display_name == "Instagram"


def test_strip_query():
    assert url_classifier.strip_query("https://example.com/a?token=secret#x") == "https://example.com/a"
