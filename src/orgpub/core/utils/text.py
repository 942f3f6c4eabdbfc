"""Plain-text extraction and reading statistics for parsed documents"""

import math
import re
from typing import Iterable

from orgpub.core.ast import AstNode


def plain_text(nodes: Iterable[AstNode]) -> str:
    """Concatenate every text value under nodes, space separated."""
    parts: list[str] = []
    for node in nodes:
        if node.value:
            parts.append(node.value)
        if node.children:
            parts.append(plain_text(node.children))
    return ' '.join(p for p in parts if p)


def word_count(text: str) -> int:
    return len(text.split())


def reading_time(text: str, words_per_minute: int = 200) -> int:
    """Minutes needed to read text, rounded up."""
    return math.ceil(word_count(text) / words_per_minute)


def excerpt(text: str, max_length: int = 160) -> str:
    """Whitespace-collapsed prefix of text, suffixed with '...' when truncated."""
    cleaned = re.sub(r'\s+', ' ', text).strip()
    if len(cleaned) <= max_length:
        return cleaned
    return cleaned[:max_length].strip() + '...'
