"""Typed, immutable AST nodes and their constructors"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from orgpub.core.models import Metadata


class NodeType(str, Enum):
    """Restrict AST nodes to the block and inline constructs the parser emits"""
    document = "document"
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    list_item = "listItem"
    table = "table"
    table_row = "tableRow"
    table_cell = "tableCell"
    code_block = "codeBlock"
    quote = "quote"
    example = "example"
    verse = "verse"
    center = "center"
    drawer = "drawer"
    shortcode = "shortcode"
    text = "text"
    bold = "bold"
    italic = "italic"
    underline = "underline"
    code = "code"
    verbatim = "verbatim"
    strike = "strike"
    link = "link"
    image = "image"
    footnote = "footnote"
    line_break = "lineBreak"


class AstNode(BaseModel):
    """A node owning its children by value; `value` is only set on text leaves."""
    model_config = ConfigDict(frozen=True)

    type:       NodeType
    children:   tuple[AstNode, ...] = ()
    value:      Optional[str] = None
    properties: dict[str, Any] = Field(default_factory=dict)


class Document(AstNode):
    """Root node; the only node that carries document metadata."""
    type:     NodeType = NodeType.document
    metadata: Metadata = Field(default_factory=Metadata)


def create_node(
    type: NodeType,
    properties: Optional[dict[str, Any]] = None,
    children: Optional[Sequence[AstNode]] = None,
    ) -> AstNode:
    return AstNode(type=type, properties=properties or {}, children=tuple(children or ()))


def create_text(value: str) -> AstNode:
    return AstNode(type=NodeType.text, value=value)


def create_document(metadata: Metadata, children: Sequence[AstNode]) -> Document:
    return Document(metadata=metadata, children=tuple(children))
