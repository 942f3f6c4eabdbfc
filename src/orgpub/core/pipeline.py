"""Pipeline entry points: Org text or file -> document AST -> rendered HTML"""

from pathlib import Path
from typing import Optional

from orgpub.core.ast import Document
from orgpub.core.models import RenderOptions, RenderResult
from orgpub.core.parser import parse
from orgpub.core.render.html import render
from orgpub.logging import get_logger


logger = get_logger("pipeline")


def parse_org(text: str, words_per_minute: int = 200, excerpt_length: int = 160) -> Document:
    """Parse Org text into a Document carrying enriched metadata."""
    return parse(text, words_per_minute=words_per_minute, excerpt_length=excerpt_length)


def org_to_html(
    text: str,
    options: Optional[RenderOptions] = None,
    words_per_minute: int = 200,
    excerpt_length: int = 160,
    ) -> RenderResult:
    """Parse and render Org text in one step."""
    document = parse_org(text, words_per_minute, excerpt_length)
    return render(document, options)


def render_file(
    path: Path,
    options: Optional[RenderOptions] = None,
    words_per_minute: int = 200,
    excerpt_length: int = 160,
    ) -> RenderResult:
    """Read an .org file as UTF-8 (BOM tolerated) and render it.

    Collaborator failures propagate; callers decide whether to skip the
    document or retry with highlighting or sanitization disabled.
    """
    raw = path.read_text(encoding='utf-8-sig')
    result = org_to_html(raw, options, words_per_minute, excerpt_length)
    logger.debug(
        "Rendered %s (%d words, %d min read)",
        path, result.metadata.word_count or 0, result.metadata.reading_time or 0,
    )
    return result
