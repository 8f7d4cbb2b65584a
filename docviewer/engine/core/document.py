"""Document data structures for the viewer engine.

This module contains the loaded documents and the store that holds them
in manifest order.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ...models.documents import DEFAULT_SECTION

_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Derive the hash-routing key for a document title.

    Lowercases the title and collapses every whitespace run into a single
    hyphen. No other characters are touched, so two titles that only
    differ in case map to the same slug.

    Args:
        title: Display title of the document

    Returns:
        The slug, e.g. ``"Getting Started"`` → ``"getting-started"``
    """
    return _WHITESPACE_RUN.sub("-", title.lower())


@dataclass
class Document:
    """A documentation page listed in the manifest.

    Attributes:
        id: Opaque identifier, stable for the session
        title: Display name from the manifest
        section: Navigation grouping label
        path: Source location passed to the fetch collaborator
        slug: Routing key derived from the title
    """

    id: str
    title: str
    path: str
    section: str = DEFAULT_SECTION
    slug: str = ""
    _content: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.section:
            self.section = DEFAULT_SECTION
        if not self.slug:
            self.slug = slugify(self.title)

    @property
    def content(self) -> str:
        """Raw markdown body (empty until loaded)."""
        return self._content or ""

    @property
    def loaded(self) -> bool:
        return self._content is not None

    def attach_content(self, text: str) -> None:
        """Populate the body once; documents never change afterwards."""
        if self._content is not None:
            raise ValueError(f"Content of '{self.slug}' is already loaded")
        self._content = text


class DocumentStore:
    """Ordered set of documents, read-only once published.

    Written once by the loader and then shared by search, navigation and
    the table-of-contents tracker.
    """

    def __init__(self, documents: list[Document] | None = None):
        self._documents: list[Document] = []
        self._by_slug: dict[str, Document] = {}
        self._published = False
        for document in documents or []:
            self.add(document)

    def add(self, document: Document) -> None:
        if self._published:
            raise RuntimeError("Document store is read-only after publish")
        self._documents.append(document)
        # Slug collisions are not corrected: the first document keeps the slug
        self._by_slug.setdefault(document.slug, document)

    def publish(self) -> "DocumentStore":
        """Freeze the store so readers can share it safely."""
        self._published = True
        return self

    @property
    def published(self) -> bool:
        return self._published

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, index: int) -> Document:
        return self._documents[index]

    def first(self) -> Document | None:
        return self._documents[0] if self._documents else None

    def find_by_slug(self, slug: str) -> Document | None:
        return self._by_slug.get(slug)

    def index_of(self, slug: str) -> int:
        """Manifest position of the document with ``slug``, or -1."""
        for index, document in enumerate(self._documents):
            if document.slug == slug:
                return index
        return -1

    def grouped_by_section(self) -> dict[str, list[Document]]:
        """Group documents by section label.

        Sections appear in first-seen order and documents keep manifest
        order within their section. Recomputed on every call.
        """
        groups: dict[str, list[Document]] = {}
        for document in self._documents:
            groups.setdefault(document.section, []).append(document)
        return groups
