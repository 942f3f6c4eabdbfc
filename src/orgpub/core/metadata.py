"""Front-matter extraction: `#+KEY: value` lines and the leading property drawer"""

import re
from typing import Any, Sequence

from orgpub.core.models import Metadata, OrgOptions
from orgpub.core.utils.slug import slugify
from orgpub.logging import get_logger


logger = get_logger("metadata")

KEYWORD_RE    = re.compile(r'^#\+(\w+):\s*(.*)$')
PROPERTY_RE   = re.compile(r'^:([\w-]+):\s*(.*)$')
DRAWER_END_RE = re.compile(r'^:END:$', re.IGNORECASE)

# `#+KEY` -> Metadata attribute for plain string values
STRING_KEYS: dict[str, str] = {
    'TITLE':           'title',
    'AUTHOR':          'author',
    'DATE':            'date',
    'EMAIL':           'email',
    'DESCRIPTION':     'description',
    'LANGUAGE':        'language',
    'CATEGORY':        'category',
    'CANONICAL':       'canonical',
    'COVER_IMAGE':     'cover_image',
    'OG_IMAGE':        'og_image',
    'OG_TITLE':        'og_title',
    'OG_DESCRIPTION':  'og_description',
    'OG_TYPE':         'og_type',
    'TWITTER_CARD':    'twitter_card',
    'TWITTER_SITE':    'twitter_site',
    'TWITTER_CREATOR': 'twitter_creator',
    'THEME_COLOR':     'theme_color',
    'ROBOTS':          'robots',
}

BOOLEAN_OPTIONS = {'num', 'date', 'author', 'email', 'title', 'tex', 'd', 'subscript', 'superscript'}


def _org_value(raw: str) -> Any:
    """Org's t/nil convention: nil -> False, t -> True, anything else verbatim."""
    if raw == 'nil':
        return False
    if raw == 't':
        return True
    return raw


def _toc_value(raw: str) -> bool | int:
    value = _org_value(raw)
    if isinstance(value, bool):
        return value
    try:
        return int(value)
    except ValueError:
        logger.debug("Unparseable toc option %r; using default depth", raw)
        return True


def parse_options(value: str) -> dict[str, Any]:
    """Parse an `#+OPTIONS:` value of whitespace-separated `key:value` pairs."""
    options: dict[str, Any] = {}
    for part in value.split():
        key, sep, raw = part.partition(':')
        if not sep or not key or not raw:
            continue
        lowered = key.lower()
        if lowered == 'toc':
            options['toc'] = _toc_value(raw)
        elif lowered in BOOLEAN_OPTIONS:
            options[lowered] = raw != 'nil'
        elif lowered == 'h':
            if raw.isdigit():
                options['H'] = int(raw)
        elif key == '_':
            options['subscript'] = raw != 'nil'
        elif key == '^':
            options['superscript'] = raw != 'nil'
        else:
            options[key] = _org_value(raw)
    return options


def parse_file_tags(value: str) -> list[str]:
    """Split a `:a:b:c:` tag string (whitespace separated also accepted)."""
    return re.findall(r'[^:\s]+', value)


def _apply_keyword(metadata: Metadata, key: str, value: str) -> None:
    if key in STRING_KEYS:
        setattr(metadata, STRING_KEYS[key], value)
    elif key == 'KEYWORDS':
        metadata.keywords = [k.strip() for k in value.split(',') if k.strip()]
    elif key == 'FILETAGS':
        metadata.tags = parse_file_tags(value)
    elif key == 'OPTIONS':
        merged = {**metadata.options.model_dump(exclude_none=True), **parse_options(value)}
        metadata.options = OrgOptions.model_validate(merged)
    else:
        logger.debug("Keeping unknown keyword #+%s under properties", key)
        metadata.properties[key] = value


def _is_comment(line: str) -> bool:
    return line == '#' or line.startswith('# ')


def extract_metadata(lines: Sequence[str]) -> tuple[Metadata, int]:
    """Consume front-matter from the top of lines.

    Returns (metadata, content_start_line). Extraction stops at the first line
    that is not blank, a comment, a keyword, or part of a property drawer;
    `#+` lines without a `KEY:` shape end extraction and stay in the body.
    """
    metadata = Metadata()
    drawer: dict[str, str] | None = None
    i = 0

    while i < len(lines):
        line = lines[i].strip()

        if drawer is not None:
            if DRAWER_END_RE.match(line):
                metadata.properties.update(drawer)
                drawer = None
            elif m := PROPERTY_RE.match(line):
                drawer[m.group(1)] = m.group(2).strip()
            i += 1
            continue

        if not line or _is_comment(line):
            i += 1
            continue

        if line.upper() == ':PROPERTIES:':
            drawer = {}
            i += 1
            continue

        if m := KEYWORD_RE.match(line):
            _apply_keyword(metadata, m.group(1).upper(), m.group(2).strip())
            i += 1
            continue

        # A `:KEY: value` line outside a drawer; bare `:NAME:` opens a body drawer.
        if (m := PROPERTY_RE.match(line)) and m.group(2).strip():
            metadata.properties[m.group(1)] = m.group(2).strip()
            i += 1
            continue

        break

    if drawer:
        metadata.properties.update(drawer)

    if metadata.title:
        metadata.slug = slugify(metadata.title)

    return metadata, i
