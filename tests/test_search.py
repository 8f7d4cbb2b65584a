"""Tests for the search matcher and term highlighting."""

from docviewer.engine.search import highlight_html, highlight_text, search
from docviewer.engine.search.matcher import match_lines, normalize_query
from docviewer.models import SearchStatus

from .conftest import make_store


# =============================================================================
# QUERY NORMALIZATION
# =============================================================================


def test_normalize_query_lowercases_trims_and_splits():
    query = normalize_query("  User   ID ")
    assert query.raw == "user   id"
    assert query.terms == ("user", "id")


def test_short_query_is_not_scanned(store):
    outcome = search(store, " a ")
    assert outcome.status == SearchStatus.TOO_SHORT
    assert outcome.results == []


# =============================================================================
# MATCHING
# =============================================================================


def test_line_match_requires_every_term():
    content = "user only\nid only\nthe user id line"
    matched = match_lines(content, ("user", "id"))

    assert [(m.line_index, m.line_text) for m in matched] == [(2, "the user id line")]


def test_line_indices_count_all_line_break_styles():
    matched = match_lines("a\r\nb\rneedle\nneedle", ("needle",))
    assert [m.line_index for m in matched] == [2, 3]


def test_results_follow_manifest_order(store):
    outcome = search(store, "user id")

    assert outcome.status == SearchStatus.RESULTS
    assert [r.slug for r in outcome.results] == ["getting-started", "api"]
    assert outcome.results[0].snippet == "Returns the user id for this session"


def test_title_only_match_has_no_snippet():
    store = make_store(("Changelog", None, "Nothing here."))
    outcome = search(store, "changelog")

    result = outcome.results[0]
    assert result.title_matched
    assert result.matched_lines == []
    assert result.snippet is None


def test_no_results_status(store):
    outcome = search(store, "kubernetes")
    assert outcome.status == SearchStatus.NO_RESULTS
    assert outcome.results == []


def test_regex_metacharacters_are_literal():
    store = make_store(("Ops", None, "call f(x) then [y]\nplain"))

    outcome = search(store, "f(x)")
    assert [m.line_index for m in outcome.results[0].matched_lines] == [0]
    assert search(store, "[y").status == SearchStatus.RESULTS
    assert search(store, ".*").status == SearchStatus.NO_RESULTS


# =============================================================================
# HIGHLIGHTING
# =============================================================================


def test_highlight_wraps_each_term_occurrence():
    marked = highlight_text("Returns the user id for this session", ("user", "id"))
    assert marked == (
        'Returns the <span class="highlight">user</span> '
        '<span class="highlight">id</span> for this session'
    )


def test_highlight_is_case_insensitive_and_keeps_original_case():
    assert highlight_text("User", ("user",)) == '<span class="highlight">User</span>'


def test_overlapping_terms_wrap_once_longest_first():
    assert highlight_text("username", ("use", "user")) == '<span class="highlight">user</span>name'


def test_highlight_escapes_plain_text():
    assert highlight_text("<b>user</b>", ("user",)) == (
        '&lt;b&gt;<span class="highlight">user</span>&lt;/b&gt;'
    )


def test_highlight_html_leaves_tags_and_attributes_alone():
    marked = highlight_html('<a href="/user">user page</a>', ("user",))
    assert marked == '<a href="/user"><span class="highlight">user</span> page</a>'


def test_highlight_without_terms_is_identity():
    assert highlight_html("<em>x</em>", ()) == "<em>x</em>"
    assert highlight_text("a & b", ()) == "a &amp; b"
