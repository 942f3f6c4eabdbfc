"""Line classification: Org body text -> flat token stream"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TokenKind(str, Enum):
    heading = "HEADING"
    list_item = "LIST_ITEM"
    code_block_start = "CODE_BLOCK_START"
    code_block_end = "CODE_BLOCK_END"
    block_start = "BLOCK_START"
    block_end = "BLOCK_END"
    table_row = "TABLE_ROW"
    drawer_start = "DRAWER_START"
    drawer_end = "DRAWER_END"
    shortcode = "SHORTCODE"
    text = "TEXT"
    blank = "BLANK"


@dataclass(frozen=True)
class Token:
    """One classified source line.

    `raw_value` depends on kind: heading title, list-item text, trimmed table
    row, trimmed drawer/shortcode line, or the untrimmed line for TEXT.
    `source` is always the literal line so verbatim regions survive lexing.
    """
    kind:       TokenKind
    raw_value:  str
    line:       int            # 0-based source line index
    indent:     int            # leading whitespace characters
    source:     str = ""
    attributes: dict[str, Any] = field(default_factory=dict)


HEADING_RE     = re.compile(r'^(\*+)\s+(.*?)\s*$')
SRC_BEGIN_RE   = re.compile(r'^#\+BEGIN_SRC(?:\s+(.*))?$', re.IGNORECASE)
SRC_END_RE     = re.compile(r'^#\+END_SRC\b', re.IGNORECASE)
BLOCK_BEGIN_RE = re.compile(r'^#\+BEGIN_(\w+)(?:\s+(.*))?$', re.IGNORECASE)
BLOCK_END_RE   = re.compile(r'^#\+END_(\w+)', re.IGNORECASE)
DRAWER_RE      = re.compile(r'^:([\w-]+):$')
DRAWER_END_RE  = re.compile(r'^:END:$', re.IGNORECASE)
LIST_RE        = re.compile(r'^([-+*]|\d+[.)])\s+(.*)$')
SHORTCODE_RE   = re.compile(r'^\{\{<\s*([\w-]+)(.*)>\}\}')


def _src_attributes(args: str | None) -> dict[str, Any]:
    """Split `#+BEGIN_SRC` arguments into a language and header parameters."""
    parts = (args or '').split(None, 1)
    if parts and not parts[0].startswith(':'):
        return {'language': parts[0], 'parameters': parts[1] if len(parts) > 1 else ''}
    return {'language': '', 'parameters': (args or '').strip()}


def classify(line: str, index: int = 0) -> Token:
    """Classify a single line; TEXT is the total fallback so this never fails."""
    trimmed = line.strip()
    indent = len(line) - len(line.lstrip())

    def tok(kind: TokenKind, value: str = '', **attributes) -> Token:
        return Token(kind, value, index, indent, line, attributes)

    if not trimmed:
        return tok(TokenKind.blank)

    # Headings must start in column 0; indented stars are list bullets.
    if m := HEADING_RE.match(line):
        return tok(TokenKind.heading, m.group(2), level=len(m.group(1)))

    if m := SRC_BEGIN_RE.match(trimmed):
        return tok(TokenKind.code_block_start, **_src_attributes(m.group(1)))
    if SRC_END_RE.match(trimmed):
        return tok(TokenKind.code_block_end)

    if m := BLOCK_BEGIN_RE.match(trimmed):
        return tok(TokenKind.block_start, block_type=m.group(1).upper(), parameters=(m.group(2) or '').strip())
    if m := BLOCK_END_RE.match(trimmed):
        return tok(TokenKind.block_end, block_type=m.group(1).upper())

    if (m := DRAWER_RE.match(trimmed)) and m.group(1).upper() != 'END':
        return tok(TokenKind.drawer_start, trimmed, name=m.group(1))
    if DRAWER_END_RE.match(trimmed):
        return tok(TokenKind.drawer_end)

    if trimmed.startswith('|'):
        return tok(TokenKind.table_row, trimmed)

    if m := LIST_RE.match(trimmed):
        return tok(TokenKind.list_item, m.group(2), ordered=m.group(1)[0].isdigit(), bullet=m.group(1))

    if m := SHORTCODE_RE.match(trimmed):
        return tok(TokenKind.shortcode, trimmed, component=m.group(1))

    return tok(TokenKind.text, line)


def tokenize(text: str, line_offset: int = 0) -> list[Token]:
    """Return one token per line of text; line indices start at line_offset."""
    return [
        classify(line.rstrip('\r'), line_offset + i)
        for i, line in enumerate(text.split('\n'))
    ]
