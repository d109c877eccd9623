"""Tests for rich-text rendering and counting."""

from unfold.utils.rich_text import count_characters, count_words, plain_text, render_rich_text

DOCUMENT = {
    "type": "doc",
    "content": [
        {
            "type": "heading",
            "attrs": {"level": 2},
            "content": [{"type": "text", "text": "Overview"}],
        },
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Built with "},
                {"type": "text", "text": "care", "marks": [{"type": "bold"}]},
                {"type": "text", "text": " & "},
                {
                    "type": "text",
                    "text": "love",
                    "marks": [{"type": "link", "attrs": {"href": "https://example.com"}}],
                },
            ],
        },
        {
            "type": "bulletList",
            "content": [
                {
                    "type": "listItem",
                    "content": [
                        {"type": "paragraph", "content": [{"type": "text", "text": "Fast"}]}
                    ],
                }
            ],
        },
    ],
}


def test_render_rich_text():
    html = str(render_rich_text(DOCUMENT))

    assert "<h2>Overview</h2>" in html
    assert "<strong>care</strong>" in html
    assert " &amp; " in html
    assert '<a href="https://example.com"' in html
    assert "<ul><li><p>Fast</p></li></ul>" in html


def test_render_escapes_text():
    document = {
        "type": "doc",
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "<script>"}]}],
    }
    assert str(render_rich_text(document)) == "<p>&lt;script&gt;</p>"


def test_unsafe_links_are_dropped():
    document = {
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {
                        "type": "text",
                        "text": "click",
                        "marks": [{"type": "link", "attrs": {"href": "javascript:alert(1)"}}],
                    }
                ],
            }
        ],
    }
    assert str(render_rich_text(document)) == "<p>click</p>"


def test_render_plain_string_and_empty_values():
    assert str(render_rich_text("a < b")) == "<p>a &lt; b</p>"
    assert str(render_rich_text(None)) == ""
    assert str(render_rich_text({})) == ""


def test_plain_text_and_counts():
    assert plain_text(DOCUMENT) == "Overview\nBuilt with care & love\nFast"
    assert count_words(DOCUMENT) == 7
    assert count_characters(DOCUMENT) == len("OverviewBuilt with care & loveFast")
    assert count_words(None) == 0
