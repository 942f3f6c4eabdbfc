"""Unit tests for core/inline.py"""

import re
from html import unescape

import pytest

from orgpub.core.ast import NodeType
from orgpub.core.inline import parse_inline
from orgpub.core.models import RenderOptions
from orgpub.core.render.html import RenderContext, render_children


def _types(nodes):
    return [n.type for n in nodes]


def _visible(text: str) -> str:
    """Render inline nodes and strip tags back to visible characters."""
    ctx = RenderContext(options=RenderOptions(sanitize=False))
    html = render_children(parse_inline(text), ctx)
    return unescape(re.sub(r"<[^>]+>", "", html))


def test_plain_text_single_leaf():
    """Text without markup becomes one text leaf."""
    nodes = parse_inline("just words")
    assert _types(nodes) == [NodeType.text]
    assert nodes[0].value == "just words"


def test_bold_and_italic():
    """Bold and italic split the surrounding text into leaves."""
    nodes = parse_inline("Some *bold* and /italic/ text.")
    assert _types(nodes) == [
        NodeType.text, NodeType.bold, NodeType.text, NodeType.italic, NodeType.text,
    ]
    assert nodes[1].children[0].value == "bold"
    assert nodes[3].children[0].value == "italic"


def test_bold_nests():
    """Bold content is parsed recursively."""
    (bold,) = parse_inline("*a /b/ c*")
    assert bold.type == NodeType.bold
    assert _types(bold.children) == [NodeType.text, NodeType.italic, NodeType.text]


def test_italic_does_not_nest():
    """Italic content is a single literal text leaf."""
    (italic,) = parse_inline("/a *b* c/")
    assert _types(italic.children) == [NodeType.text]
    assert italic.children[0].value == "a *b* c"


@pytest.mark.parametrize("text,node_type", [
    ("_under_", NodeType.underline),
    ("~code~", NodeType.code),
    ("=verb=", NodeType.verbatim),
    ("+gone+", NodeType.strike),
])
def test_single_leaf_markup(text, node_type):
    """Each delimiter pair maps to its node type with one text child."""
    (node,) = parse_inline(text)
    assert node.type == node_type
    assert node.children[0].value == text[1:-1]


@pytest.mark.parametrize("text", ["a * b * c", "a *b", "C++ rocks", "**", "x = y", "[[oops"])
def test_unmatched_or_spaced_markers_stay_text(text):
    """Openers followed by space, unclosed, or empty are literal text."""
    nodes = parse_inline(text)
    assert _types(nodes) == [NodeType.text]
    assert nodes[0].value == text


def test_link_with_description():
    """[[url][label]] becomes a link wrapping the label."""
    (link,) = parse_inline("[[https://x.test/page][Label]]")
    assert link.type == NodeType.link
    assert link.properties["href"] == "https://x.test/page"
    assert link.children[0].value == "Label"


def test_link_without_description_uses_url():
    """A bare [[url]] shows the url as its text."""
    (link,) = parse_inline("[[https://x.test]]")
    assert link.children[0].value == "https://x.test"


def test_image_link():
    """Links to image files become image leaves."""
    (image,) = parse_inline("[[https://x.test/a.png][Alt]]")
    assert image.type == NodeType.image
    assert image.properties == {"src": "https://x.test/a.png", "alt": "Alt"}
    assert image.children == ()


def test_file_prefix_stripped():
    """file: links resolve to plain relative paths; extension match ignores case."""
    (image,) = parse_inline("[[file:img/Pic.JPG]]")
    assert image.type == NodeType.image
    assert image.properties["src"] == "img/Pic.JPG"


def test_footnote_reference():
    """[fn:ref] is a childless footnote leaf between text leaves."""
    nodes = parse_inline("see[fn:1].")
    assert _types(nodes) == [NodeType.text, NodeType.footnote, NodeType.text]
    assert nodes[1].properties == {"ref": "1"}
    assert nodes[1].children == ()


def test_line_break():
    """A literal double backslash is a line break."""
    nodes = parse_inline("a\\\\b")
    assert _types(nodes) == [NodeType.text, NodeType.line_break, NodeType.text]


@pytest.mark.parametrize("text,visible", [
    ("Some *bold* and /italic/ text.", "Some bold and italic text."),
    ("x ~a<b~ & =c= +d+ _e_", "x a<b & c d e"),
    ("go to [[https://x.test][the site]] now", "go to the site now"),
    ("plain & <angle>", "plain & <angle>"),
])
def test_no_character_loss(text, visible):
    """Rendering inline nodes keeps every visible character."""
    assert _visible(text) == visible


def test_reparse_of_visible_text_is_plain():
    """Visible text of parsed markup re-parses to text leaves only."""
    visible = _visible("Some *bold* and /italic/ text.")
    assert _types(parse_inline(visible)) == [NodeType.text]
