"""Inline markup parser: emphasis, links, images, footnote refs, line breaks"""

import re

from orgpub.core.ast import AstNode, NodeType, create_node, create_text


# marker -> (node type, content is parsed recursively)
EMPHASIS: dict[str, tuple[NodeType, bool]] = {
    '*': (NodeType.bold, True),
    '/': (NodeType.italic, False),
    '_': (NodeType.underline, False),
    '~': (NodeType.code, False),
    '=': (NodeType.verbatim, False),
    '+': (NodeType.strike, False),
}

IMAGE_RE = re.compile(r'\.(png|jpe?g|gif|svg|webp)$', re.IGNORECASE)


def _target(url: str) -> str:
    """Strip Org's `file:` link prefix."""
    return url[len('file:'):] if url.startswith('file:') else url


def _link(content: str) -> AstNode:
    url, _, description = content.partition('][')
    target = _target(url)
    label = description or target
    if IMAGE_RE.search(url):
        return create_node(NodeType.image, {'src': target, 'alt': label})
    return create_node(NodeType.link, {'href': target}, [create_text(label)])


def _emphasis(text: str, i: int) -> tuple[AstNode, int] | None:
    """Match emphasis opening at text[i]; return (node, index past closer)."""
    marker = text[i]
    if i + 1 >= len(text) or text[i + 1].isspace():
        return None
    end = text.find(marker, i + 1)
    if end <= i + 1:
        return None
    node_type, nested = EMPHASIS[marker]
    content = text[i + 1:end]
    children = parse_inline(content) if nested else [create_text(content)]
    return create_node(node_type, {}, children), end + 1


def _match_at(text: str, i: int) -> tuple[AstNode, int] | None:
    char = text[i]
    if char in EMPHASIS:
        return _emphasis(text, i)

    if text.startswith('[[', i):
        end = text.find(']]', i + 2)
        if end != -1:
            return _link(text[i + 2:end]), end + 2
        return None

    if text.startswith('[fn:', i):
        end = text.find(']', i + 4)
        if end > i + 4:
            return create_node(NodeType.footnote, {'ref': text[i + 4:end]}), end + 1
        return None

    if text.startswith('\\\\', i):
        return create_node(NodeType.line_break), i + 2

    return None


def parse_inline(text: str) -> list[AstNode]:
    """Scan text left to right into inline nodes.

    An opener without a usable closer is plain text; scanning resumes one
    character later.
    """
    nodes: list[AstNode] = []
    pending: list[str] = []
    i = 0

    while i < len(text):
        match = _match_at(text, i)
        if match is None:
            pending.append(text[i])
            i += 1
            continue
        if pending:
            nodes.append(create_text(''.join(pending)))
            pending = []
        node, i = match
        nodes.append(node)

    if pending:
        nodes.append(create_text(''.join(pending)))
    return nodes
