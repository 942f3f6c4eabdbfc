"""Unit tests for core/render/toc.py"""

from orgpub.core.models import HeadingRecord
from orgpub.core.render.toc import build_toc


def _h(level, text):
    return HeadingRecord(level=level, text=text, id=text.lower())


def test_empty_returns_empty_string():
    assert build_toc([]) == ""


def test_nesting_exact():
    """Deeper headings open a nested list that closes on the way back up."""
    toc = build_toc([_h(1, "a"), _h(2, "b"), _h(1, "c")])
    assert toc == (
        '<nav class="toc"><h2>Table of Contents</h2><ul>'
        '<li><a href="#a">a</a></li>'
        '<ul><li><a href="#b">b</a></li></ul>'
        '<li><a href="#c">c</a></li>'
        '</ul></nav>\n'
    )


def test_unclosed_levels_closed_at_end():
    """Open nested lists are closed before the nav ends."""
    toc = build_toc([_h(1, "a"), _h(3, "b")])
    assert toc.count("<ul>") == toc.count("</ul>") == 3


def test_depth_filter():
    """Headings deeper than max_depth are omitted."""
    toc = build_toc([_h(1, "a"), _h(2, "b"), _h(3, "c")], max_depth=2)
    assert "#c" not in toc
    assert "#b" in toc


def test_all_filtered_returns_empty():
    assert build_toc([_h(4, "a")], max_depth=3) == ""


def test_base_is_shallowest_listed_level():
    """A document starting at level 2 does not open an extra list."""
    toc = build_toc([_h(2, "a"), _h(2, "b")])
    assert toc.count("<ul>") == 1


def test_text_escaped():
    toc = build_toc([HeadingRecord(level=1, text="a < b", id="a-b")])
    assert "a &lt; b" in toc
