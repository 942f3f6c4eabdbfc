"""Allowlist HTML sanitizer for rendered fragments"""

import nh3


ALLOWED_TAGS = {
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br', 'hr',
    'strong', 'em', 'u', 'del', 'code', 'pre',
    'a', 'img',
    'ul', 'ol', 'li',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
    'blockquote', 'div', 'span',
    'sup', 'sub',
    'nav',
}

ALLOWED_ATTRIBUTES = {
    'href', 'src', 'alt', 'title', 'class', 'id',
    'data-component', 'data-props',
}


def sanitize(html: str) -> str:
    """Strip tags and attributes outside the allowlist; `data-*` attributes pass through."""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes={'*': ALLOWED_ATTRIBUTES},
        generic_attribute_prefixes={'data-'},
        link_rel=None,
    )
