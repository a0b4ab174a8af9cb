from recipe_extractor.app.services.url_parsing.markdown_converter import (
    convert_html_to_markdown,
    convert_html_to_markdown_with_options,
)


def test_headings_and_bullets():
    markdown = convert_html_to_markdown("<h2>Ingredients</h2><ul><li>flour</li><li>sugar</li></ul>")
    assert markdown.startswith("## Ingredients")
    assert "- flour" in markdown
    assert "- sugar" in markdown


def test_images_render_with_alt_and_src():
    markdown = convert_html_to_markdown('<p><img src="https://cdn.example.com/pie.jpg" alt="Apple pie" /></p>')
    assert markdown == "![Apple pie](https://cdn.example.com/pie.jpg)"


def test_image_without_src_keeps_alt_text():
    assert convert_html_to_markdown('<p><img alt="Missing" /></p>') == "Missing"


def test_strong_uses_asterisks():
    assert convert_html_to_markdown("<p><strong>Serves:</strong> 4</p>") == "**Serves:** 4"


def test_blank_runs_are_collapsed():
    markdown = convert_html_to_markdown("<p>a</p>" + "<br>" * 8 + "<p>b</p>")
    assert "\n\n\n\n" not in markdown
    assert markdown.startswith("a") and markdown.endswith("b")


def test_options_can_be_overridden():
    markdown = convert_html_to_markdown_with_options("<ul><li>x</li></ul>", bullets="*")
    assert markdown == "* x"


def test_empty_input():
    assert convert_html_to_markdown("") == ""
