"""Shared fixtures for the viewer test-suite."""

import pytest

from docviewer.config import settings
from docviewer.engine import (
    Document,
    DocumentStore,
    HeadlessPage,
    MarkdownRenderer,
)
from docviewer.engine.viewer import DocViewer

GETTING_STARTED = """# Getting Started

Install the package and run the server.

## Installation

Use pip to install it.

### Requirements

Python 3.11 or newer.

## Usage

Returns the user id for this session
"""

API = """# API

## Endpoints

The `GET /users` endpoint returns the user list.

| Name | Type |
|------|------|
| id   | int  |

```python
def get_user(user_id):
    return user_id
```
"""

FAQ = """# FAQ

No headings below the title here.
Ask questions in the forum.
"""


def make_store(*specs: tuple[str, str | None, str]) -> DocumentStore:
    """Published store from (title, section, content) triples."""
    documents = []
    for index, (title, section, content) in enumerate(specs):
        document = Document(
            id=f"doc-{index}",
            title=title,
            path=f"docs/{index}.md",
            section=section or "",
        )
        document.attach_content(content)
        documents.append(document)
    return DocumentStore(documents).publish()


@pytest.fixture(autouse=True)
def no_search_delay(monkeypatch):
    """Searches run without the UI pause."""
    monkeypatch.setattr(settings, "search_delay_seconds", 0.0)


@pytest.fixture
def store() -> DocumentStore:
    return make_store(
        ("Getting Started", "Guides", GETTING_STARTED),
        ("API", "Guides", API),
        ("FAQ", None, FAQ),
    )


@pytest.fixture
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture
def make_viewer(store, renderer):
    """Factory for a viewer on a fresh headless page."""

    def factory(fragment: str = "", **kwargs) -> DocViewer:
        page = HeadlessPage(fragment=fragment)
        kwargs.setdefault("renderer", renderer)
        return DocViewer(kwargs.pop("store", store), page, **kwargs)

    return factory
