"""HTML renderer: AST walk, TOC and footnote assembly, sanitization"""

from dataclasses import dataclass, field
from html import escape
from typing import Callable, Optional, Sequence

from orgpub.core.ast import AstNode, Document, NodeType
from orgpub.core.models import HeadingRecord, OrgOptions, RenderOptions, RenderResult
from orgpub.core.render.highlight import highlight, plain_code_block
from orgpub.core.render.sanitizer import sanitize
from orgpub.core.render.toc import build_toc
from orgpub.core.utils.slug import heading_id


@dataclass
class RenderContext:
    """Per-call state gathered while walking one document."""
    options:          RenderOptions
    org_options:      OrgOptions = field(default_factory=OrgOptions)
    headings:         list[HeadingRecord] = field(default_factory=list)
    footnotes:        dict[str, str] = field(default_factory=dict)   # ref -> body html, first-seen order
    footnote_numbers: dict[str, int] = field(default_factory=dict)
    footnote_counter: int = 0
    definitions:      dict[str, tuple[AstNode, ...]] = field(default_factory=dict)


def _text_of(node: AstNode) -> str:
    """Concatenated literal text under node, markup removed."""
    if node.value is not None:
        return node.value
    return ''.join(_text_of(c) for c in node.children)


def render_children(nodes: Sequence[AstNode], ctx: RenderContext) -> str:
    return ''.join(render_node(n, ctx) for n in nodes)


def _wrap(open_tag: str, close_tag: str) -> Callable[[AstNode, RenderContext], str]:
    def renderer(node: AstNode, ctx: RenderContext) -> str:
        return f'{open_tag}{render_children(node.children, ctx)}{close_tag}'
    return renderer


def _heading(node: AstNode, ctx: RenderContext) -> str:
    level = max(1, min(int(node.properties.get('level', 1)), 6))
    text = _text_of(node)
    anchor = heading_id(text)
    ctx.headings.append(HeadingRecord(level=level, text=text, id=anchor))
    return f'<h{level} id="{escape(anchor)}">{render_children(node.children, ctx)}</h{level}>\n'


def _list(node: AstNode, ctx: RenderContext) -> str:
    tag = 'ol' if node.properties.get('ordered') else 'ul'
    return f'<{tag}>\n{render_children(node.children, ctx)}</{tag}>\n'


def _row(node: AstNode, ctx: RenderContext) -> str:
    cells = ''.join(f'<td>{render_children(c.children, ctx)}</td>\n' for c in node.children)
    return f'<tr>\n{cells}</tr>\n'


def _table(node: AstNode, ctx: RenderContext) -> str:
    """Header rows stay in the AST only; every row renders as a tbody row."""
    rows = ''.join(_row(r, ctx) for r in node.children)
    return f'<table>\n<tbody>\n{rows}</tbody>\n</table>\n'


def _code_block(node: AstNode, ctx: RenderContext) -> str:
    language = str(node.properties.get('language', ''))
    code = node.children[0].value or '' if node.children else ''
    if ctx.options.code_highlight:
        return highlight(code, language)
    return plain_code_block(code, language)


def _drawer(node: AstNode, ctx: RenderContext) -> str:
    if not ctx.org_options.d:
        return ''
    name = escape(str(node.properties.get('name', '')).lower())
    return f'<div class="drawer {name}">{escape(_text_of(node))}</div>\n'


def _shortcode(node: AstNode, ctx: RenderContext) -> str:
    """Placeholder element resolved later by a component generator."""
    component = escape(str(node.properties.get('component', '')))
    attrs = node.properties.get('attrs', {})
    attr_html = ''.join(f' {escape(str(k))}="{escape(str(v))}"' for k, v in attrs.items())
    return f'<div data-component="{component}"{attr_html}></div>\n'


def _link(node: AstNode, ctx: RenderContext) -> str:
    href = escape(str(node.properties.get('href', '')))
    return f'<a href="{href}">{render_children(node.children, ctx)}</a>'


def _image(node: AstNode, ctx: RenderContext) -> str:
    src = escape(str(node.properties.get('src', '')))
    alt = escape(str(node.properties.get('alt', '')))
    return f'<img src="{src}" alt="{alt}">'


def _footnote(node: AstNode, ctx: RenderContext) -> str:
    if node.properties.get('definition'):
        return ''
    ref = str(node.properties.get('ref', ''))
    rid = escape(ref)
    if ref in ctx.footnote_numbers:
        return f'<sup><a href="#fn-{rid}">{ctx.footnote_numbers[ref]}</a></sup>'

    ctx.footnote_counter += 1
    ctx.footnote_numbers[ref] = number = ctx.footnote_counter
    ctx.footnotes[ref] = ''
    definition = ctx.definitions.get(ref)
    ctx.footnotes[ref] = render_children(definition, ctx) if definition else f'Footnote {rid}'
    return f'<sup id="fnref-{rid}"><a href="#fn-{rid}">{number}</a></sup>'


def _text(node: AstNode, ctx: RenderContext) -> str:
    return escape(node.value or '')


RENDERERS: dict[NodeType, Callable[[AstNode, RenderContext], str]] = {
    NodeType.heading:    _heading,
    NodeType.paragraph:  _wrap('<p>', '</p>\n'),
    NodeType.list:       _list,
    NodeType.list_item:  _wrap('<li>', '</li>\n'),
    NodeType.table:      _table,
    NodeType.table_row:  _row,
    NodeType.table_cell: _wrap('<td>', '</td>\n'),
    NodeType.code_block: _code_block,
    NodeType.quote:      _wrap('<blockquote>\n', '</blockquote>\n'),
    NodeType.example:    _wrap('<pre class="example">', '</pre>\n'),
    NodeType.verse:      _wrap('<p class="verse">', '</p>\n'),
    NodeType.center:     _wrap('<div class="center">', '</div>\n'),
    NodeType.drawer:     _drawer,
    NodeType.shortcode:  _shortcode,
    NodeType.bold:       _wrap('<strong>', '</strong>'),
    NodeType.italic:     _wrap('<em>', '</em>'),
    NodeType.underline:  _wrap('<u>', '</u>'),
    NodeType.code:       _wrap('<code>', '</code>'),
    NodeType.verbatim:   _wrap('<code class="verbatim">', '</code>'),
    NodeType.strike:     _wrap('<del>', '</del>'),
    NodeType.link:       _link,
    NodeType.image:      _image,
    NodeType.footnote:   _footnote,
    NodeType.line_break: lambda node, ctx: '<br>',
    NodeType.text:       _text,
}


def render_node(node: AstNode, ctx: RenderContext) -> str:
    renderer = RENDERERS.get(node.type)
    return renderer(node, ctx) if renderer else ''


def _footnotes_html(ctx: RenderContext) -> str:
    if not ctx.footnotes:
        return ''
    items = ''.join(
        f'<li id="fn-{escape(ref)}">{body} <a href="#fnref-{escape(ref)}">↩</a></li>'
        for ref, body in ctx.footnotes.items()
    )
    return f'<div class="footnotes"><hr><ol>{items}</ol></div>\n'


def _toc_depth(toc: bool | int | None, default: int) -> Optional[int]:
    """None when the TOC is disabled, else the deepest level to list."""
    if toc is False:
        return None
    if isinstance(toc, int) and not isinstance(toc, bool):
        return toc
    return default


def render(document: Document, options: Optional[RenderOptions] = None) -> RenderResult:
    """Render a parsed document to an HTML fragment: TOC, body, then footnotes."""
    options = options or RenderOptions()
    ctx = RenderContext(
        options=options,
        org_options=document.metadata.options,
        definitions={
            str(n.properties.get('ref')): n.children
            for n in document.children
            if n.type == NodeType.footnote and n.properties.get('definition')
        },
    )

    body = render_children(document.children, ctx)

    toc = ''
    depth = _toc_depth(document.metadata.options.toc, options.toc_depth)
    if depth is not None:
        toc = build_toc(ctx.headings, depth)

    html = toc + body + _footnotes_html(ctx)
    if options.sanitize:
        html = sanitize(html)
    return RenderResult(html=html, metadata=document.metadata)
