"""Shared fixtures for core unit tests"""

import pytest

from orgpub.core.models import RenderOptions
from orgpub.core.parser import parse


SAMPLE_ORG = """\
#+TITLE: Sample Document
#+AUTHOR: Jane Doe
#+FILETAGS: :org:test:
#+OPTIONS: toc:2 num:nil

* Introduction :intro:
A paragraph with *bold* text
spanning two lines.

** Details
- item one
- item two

#+BEGIN_SRC python
print("hello")
#+END_SRC

| a | b |
|---+---|
| 1 | 2 |
"""


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_ORG


@pytest.fixture(name="sample_document")
def sample_document_fixture():
    return parse(SAMPLE_ORG)


@pytest.fixture(name="plain_options")
def plain_options_fixture():
    """Render options with both external collaborators switched off."""
    return RenderOptions(sanitize=False, code_highlight=False)
