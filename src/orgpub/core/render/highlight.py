"""Syntax highlighting for source blocks via Pygments"""

from functools import lru_cache
from html import escape

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from orgpub.logging import get_logger


logger = get_logger("highlight")


@lru_cache(maxsize=None)
def _formatter() -> HtmlFormatter:
    """Process-wide formatter, built on first use and reused read-only."""
    return HtmlFormatter(cssclass="highlight", nowrap=False)


@lru_cache(maxsize=None)
def _lexer(language: str) -> Lexer:
    return get_lexer_by_name(language, stripnl=False)


def plain_code_block(code: str, language: str = "") -> str:
    """Escaped `<pre><code>` used when highlighting is off or unavailable."""
    return f'<pre><code class="language-{escape(language)}">{escape(code)}</code></pre>\n'


def highlight(code: str, language: str) -> str:
    """Return highlighted HTML for code; never raises.

    Unknown or empty languages, and any Pygments failure, degrade to an
    escaped `<pre><code>` block.
    """
    if not language:
        return plain_code_block(code)
    try:
        return pygments_highlight(code, _lexer(language.lower()), _formatter())
    except ClassNotFound:
        logger.debug("No Pygments lexer for %r; emitting plain block", language)
        return plain_code_block(code, language)
    except Exception as e:
        logger.warning("Highlighting %s code failed: %s", language, e)
        return plain_code_block(code, language)
