"""Tests for documents and the document store."""

import pytest

from docviewer.engine.core.document import Document, DocumentStore, slugify
from docviewer.engine.viewer import nav_sections

from .conftest import make_store


# =============================================================================
# SLUGS
# =============================================================================


def test_slugify_lowercases_and_hyphenates_whitespace():
    assert slugify("Getting Started") == "getting-started"
    assert slugify("API   Reference\tGuide") == "api-reference-guide"


def test_slugify_keeps_other_characters():
    assert slugify("C++ & You?") == "c++-&-you?"


def test_case_only_differences_collide_and_first_wins():
    store = make_store(("Setup", None, "first"), ("SETUP", None, "second"))

    assert store[0].slug == store[1].slug == "setup"
    assert store.find_by_slug("setup").content == "first"


def test_slug_lookup_round_trips_for_every_document(store):
    for document in store:
        assert store.find_by_slug(document.slug) is document


# =============================================================================
# GROUPING
# =============================================================================


def test_grouping_preserves_first_seen_order_and_defaults_section():
    store = make_store(
        ("Getting Started", "Guides", ""),
        ("API", "Guides", ""),
        ("FAQ", None, ""),
    )

    groups = store.grouped_by_section()

    assert list(groups) == ["Guides", "General"]
    assert [d.slug for d in groups["Guides"]] == ["getting-started", "api"]
    assert [d.slug for d in groups["General"]] == ["faq"]


def test_nav_sections_mark_active_document_and_expansion(store):
    sections = nav_sections(store, active_slug="api", expanded={"Guides"})

    assert [s.label for s in sections] == ["Guides", "General"]
    assert sections[0].expanded is True
    assert sections[1].expanded is False
    assert [d.active for d in sections[0].documents] == [False, True]


# =============================================================================
# STORE
# =============================================================================


def test_index_of_follows_manifest_order(store):
    assert store.index_of("getting-started") == 0
    assert store.index_of("faq") == 2
    assert store.index_of("missing") == -1


def test_published_store_is_read_only(store):
    assert store.published
    with pytest.raises(RuntimeError):
        store.add(Document(id="doc-9", title="Late", path="late.md"))


def test_content_attaches_only_once():
    document = Document(id="doc-0", title="Once", path="once.md")
    assert not document.loaded
    assert document.content == ""

    document.attach_content("body")
    assert document.loaded

    with pytest.raises(ValueError):
        document.attach_content("again")


def test_empty_store_has_no_first_document():
    store = DocumentStore().publish()
    assert store.first() is None
    assert len(store) == 0
