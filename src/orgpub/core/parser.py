"""Block parser: token stream -> typed AST, plus document-level enrichment"""

import re
from typing import Callable, Optional, Sequence

from orgpub.core.ast import AstNode, Document, NodeType, create_document, create_node, create_text
from orgpub.core.inline import parse_inline
from orgpub.core.lexer import Token, TokenKind, tokenize
from orgpub.core.metadata import extract_metadata
from orgpub.core.utils.text import excerpt, plain_text, reading_time, word_count
from orgpub.logging import get_logger


logger = get_logger("parser")

BLOCK_TYPE_MAP: dict[str, NodeType] = {
    'QUOTE':   NodeType.quote,
    'EXAMPLE': NodeType.example,
    'VERSE':   NodeType.verse,
    'CENTER':  NodeType.center,
}

TAGS_RE          = re.compile(r'^(.*?)\s+:([\w:]+):$')
TABLE_SEP_RE     = re.compile(r'^\|[-+:| ]+\|$')
SHORTCODE_RE     = re.compile(r'\{\{<\s*([\w-]+)(.*?)>\}\}')
SHORTCODE_ATTR_RE = re.compile(r'''([\w-]+)=(?:"([^"]*)"|'([^']*)')''')
FOOTNOTE_DEF_RE  = re.compile(r'^\[fn:([^\]\s]+)\]\s+(.*)$')

Step = tuple[Optional[AstNode], int]


def _heading(tokens: Sequence[Token], i: int) -> Step:
    token = tokens[i]
    text, tags = token.raw_value, []
    if m := TAGS_RE.match(text):
        text = m.group(1)
        tags = [t for t in m.group(2).split(':') if t]
    level = token.attributes.get('level', 1)
    return create_node(NodeType.heading, {'level': level, 'tags': tags}, parse_inline(text)), i + 1


def _code_block(tokens: Sequence[Token], i: int) -> Step:
    start = tokens[i]
    lines = []
    i += 1
    while i < len(tokens) and tokens[i].kind != TokenKind.code_block_end:
        lines.append(tokens[i].source)
        i += 1
    properties = {
        'language': start.attributes.get('language', ''),
        'parameters': start.attributes.get('parameters', ''),
    }
    return create_node(NodeType.code_block, properties, [create_text('\n'.join(lines))]), i + 1


def _block(tokens: Sequence[Token], i: int) -> Step:
    block_type = tokens[i].attributes.get('block_type', 'QUOTE')
    lines = []
    i += 1
    while i < len(tokens) and not (
        tokens[i].kind == TokenKind.block_end and tokens[i].attributes.get('block_type') == block_type
    ):
        lines.append(tokens[i].source)
        i += 1
    node_type = BLOCK_TYPE_MAP.get(block_type, NodeType.quote)
    return create_node(node_type, {'block_type': block_type}, parse_inline('\n'.join(lines))), i + 1


def _split_row(row: str) -> list[str]:
    cells = row.split('|')
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [c.strip() for c in cells]


def _table(tokens: Sequence[Token], i: int) -> Step:
    """Rows before the first separator are header rows when a separator exists."""
    end = i
    while end < len(tokens) and tokens[end].kind == TokenKind.table_row:
        end += 1
    run = [t.raw_value for t in tokens[i:end]]
    separators = [n for n, row in enumerate(run) if TABLE_SEP_RE.match(row)]
    header_end = separators[0] if separators else 0

    rows = []
    for n, row in enumerate(run):
        if TABLE_SEP_RE.match(row):
            continue
        cells = [create_node(NodeType.table_cell, {}, parse_inline(c)) for c in _split_row(row)]
        rows.append(create_node(NodeType.table_row, {'header': n < header_end}, cells))
    return create_node(NodeType.table, {}, rows), end


def _list(tokens: Sequence[Token], i: int) -> Step:
    """Same-indent items only; a deeper or shallower item ends the list."""
    first = tokens[i]
    items = []
    while (
        i < len(tokens)
        and tokens[i].kind == TokenKind.list_item
        and tokens[i].indent == first.indent
    ):
        items.append(create_node(NodeType.list_item, {}, parse_inline(tokens[i].raw_value)))
        i += 1
    return create_node(NodeType.list, {'ordered': first.attributes.get('ordered', False)}, items), i


def _drawer(tokens: Sequence[Token], i: int) -> Step:
    name = tokens[i].attributes.get('name', '')
    lines = []
    i += 1
    while i < len(tokens) and tokens[i].kind != TokenKind.drawer_end:
        lines.append(tokens[i].source)
        i += 1
    # Property drawers were consumed as front-matter or carry no body content.
    if name == 'PROPERTIES':
        return None, i + 1
    return create_node(NodeType.drawer, {'name': name}, [create_text('\n'.join(lines))]), i + 1


def parse_shortcode(text: str) -> AstNode:
    """Parse `{{< name key="val" >}}`; unparseable input becomes a text node."""
    m = SHORTCODE_RE.search(text)
    if not m:
        logger.debug("Unparseable shortcode kept as text: %r", text)
        return create_text(text)
    attrs = {
        a.group(1): a.group(2) if a.group(2) is not None else a.group(3)
        for a in SHORTCODE_ATTR_RE.finditer(m.group(2))
    }
    return create_node(NodeType.shortcode, {'component': m.group(1), 'attrs': attrs})


def _shortcode(tokens: Sequence[Token], i: int) -> Step:
    return parse_shortcode(tokens[i].raw_value), i + 1


def _paragraph(tokens: Sequence[Token], i: int) -> Step:
    first = tokens[i]
    lines = []
    while i < len(tokens) and tokens[i].kind == TokenKind.text:
        lines.append(tokens[i].raw_value.strip())
        i += 1
    content = ' '.join(lines)
    if not content:
        return None, i

    if first.indent == 0 and (m := FOOTNOTE_DEF_RE.match(content)):
        definition = {'ref': m.group(1), 'definition': True}
        return create_node(NodeType.footnote, definition, parse_inline(m.group(2))), i

    return create_node(NodeType.paragraph, {}, parse_inline(content)), i


def _skip(tokens: Sequence[Token], i: int) -> Step:
    if tokens[i].kind != TokenKind.blank:
        logger.debug("Skipping stray %s at line %d", tokens[i].kind.value, tokens[i].line)
    return None, i + 1


BLOCK_PARSERS: dict[TokenKind, Callable[[Sequence[Token], int], Step]] = {
    TokenKind.heading:          _heading,
    TokenKind.code_block_start: _code_block,
    TokenKind.block_start:      _block,
    TokenKind.table_row:        _table,
    TokenKind.list_item:        _list,
    TokenKind.drawer_start:     _drawer,
    TokenKind.shortcode:        _shortcode,
    TokenKind.text:             _paragraph,
}


def parse_tokens(tokens: Sequence[Token]) -> list[AstNode]:
    """Convert a token stream to block nodes with a single forward cursor."""
    nodes: list[AstNode] = []
    i = 0
    while i < len(tokens):
        node, i = BLOCK_PARSERS.get(tokens[i].kind, _skip)(tokens, i)
        if node is not None:
            nodes.append(node)
    return nodes


def parse(text: str, words_per_minute: int = 200, excerpt_length: int = 160) -> Document:
    """Parse an Org document: front-matter, body blocks, and derived statistics."""
    lines = text.removeprefix('\ufeff').split('\n')
    metadata, start = extract_metadata(lines)
    children = parse_tokens(tokenize('\n'.join(lines[start:]), line_offset=start))

    body_text = plain_text(children)
    metadata.word_count = word_count(body_text)
    metadata.reading_time = reading_time(body_text, words_per_minute)
    if not metadata.excerpt:
        metadata.excerpt = metadata.description or excerpt(body_text, excerpt_length)

    return create_document(metadata, children)
