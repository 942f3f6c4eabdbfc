"""Unit tests for core/ast.py"""

import pytest
from pydantic import ValidationError

from orgpub.core.ast import Document, NodeType, create_document, create_node, create_text
from orgpub.core.models import Metadata


def test_create_text_is_leaf():
    """create_text builds a text leaf with a value and no children."""
    node = create_text("hi")
    assert node.type == NodeType.text
    assert node.value == "hi"
    assert node.children == ()


def test_create_node_defaults():
    """create_node fills empty properties and children."""
    node = create_node(NodeType.line_break)
    assert node.properties == {}
    assert node.children == ()
    assert node.value is None


def test_children_keep_order():
    """Children are stored in the order given."""
    node = create_node(NodeType.paragraph, {}, [create_text("a"), create_text("b")])
    assert [c.value for c in node.children] == ["a", "b"]


def test_nodes_are_immutable():
    """Assigning to a constructed node raises."""
    node = create_text("x")
    with pytest.raises(ValidationError):
        node.value = "y"


def test_node_type_values_match_wire_names():
    """Enum values use the camelCase names shared with downstream JSON."""
    assert NodeType.list_item.value == "listItem"
    assert NodeType.code_block.value == "codeBlock"
    assert NodeType.line_break.value == "lineBreak"


def test_create_document_owns_metadata():
    """create_document returns a document root carrying metadata."""
    doc = create_document(Metadata(title="T"), [create_text("x")])
    assert isinstance(doc, Document)
    assert doc.type == NodeType.document
    assert doc.metadata.title == "T"
    assert len(doc.children) == 1
