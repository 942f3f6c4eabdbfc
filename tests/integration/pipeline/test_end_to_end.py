"""Integration tests for the parse -> render pipeline"""

from orgpub.core.models import RenderOptions
from orgpub.core.pipeline import org_to_html, render_file


DOC = """\
#+TITLE: Field Notes
#+AUTHOR: A. Writer
#+KEYWORDS: org, html
#+OPTIONS: toc:t

:PROPERTIES:
:CUSTOM_ID: notes
:END:

* Setup
Install with ~pip~ and read [[https://example.test][the docs]].

#+BEGIN_SRC python
print("ready")
#+END_SRC

* Usage :howto:
| Flag | Meaning |
|------+---------|
| -v   | verbose |

{{< callout kind="tip" >}}

<script>alert(1)</script>
"""


def test_org_to_html_defaults():
    """Default options highlight, sanitize, and include the TOC."""
    result = org_to_html(DOC)

    assert result.html.startswith('<nav class="toc">')
    assert '<h1 id="setup">Setup</h1>' in result.html
    assert '<div class="highlight">' in result.html
    assert '<div data-component="callout"></div>' in result.html
    assert "<script>" not in result.html


def test_org_to_html_metadata():
    """Metadata comes from front-matter keywords and the property drawer."""
    meta = org_to_html(DOC).metadata
    assert meta.title == "Field Notes"
    assert meta.author == "A. Writer"
    assert meta.keywords == ["org", "html"]
    assert meta.properties["CUSTOM_ID"] == "notes"
    assert meta.slug == "field-notes"
    assert meta.word_count > 0
    assert meta.excerpt.startswith("Setup Install")


def test_org_to_html_plain_options():
    """Without sanitizing, non-Org text passes through escaped."""
    result = org_to_html(DOC, RenderOptions(sanitize=False, code_highlight=False))
    assert "&lt;script&gt;" in result.html
    assert '<pre><code class="language-python">' in result.html


def test_render_file(tmp_path):
    """render_file reads UTF-8 input and renders it."""
    path = tmp_path / "notes.org"
    path.write_text("#+TITLE: Café\n* Über\ntext\n", encoding="utf-8")

    result = render_file(path, RenderOptions(code_highlight=False))

    assert result.metadata.title == "Café"
    assert '<h1 id="über">Über</h1>' in result.html
