"""Table of contents generation from collected heading records"""

from html import escape
from typing import Sequence

from orgpub.core.models import HeadingRecord


def build_toc(headings: Sequence[HeadingRecord], max_depth: int = 3) -> str:
    """Return a nested `<nav class="toc">` for headings at or above max_depth.

    Nesting opens a `<ul>` per level deeper than the running level and closes
    one per level shallower, starting from the shallowest listed heading.
    """
    entries = [h for h in headings if h.level <= max_depth]
    if not entries:
        return ''

    base = min(h.level for h in entries)
    current = base
    parts = ['<nav class="toc"><h2>Table of Contents</h2><ul>']
    for h in entries:
        while h.level > current:
            parts.append('<ul>')
            current += 1
        while h.level < current:
            parts.append('</ul>')
            current -= 1
        parts.append(f'<li><a href="#{escape(h.id)}">{escape(h.text)}</a></li>')
    while current > base:
        parts.append('</ul>')
        current -= 1
    parts.append('</ul></nav>\n')
    return ''.join(parts)
