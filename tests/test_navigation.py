"""Tests for hash routing, pagination and deep links."""

import asyncio

from docviewer.config import settings
from docviewer.engine.navigation import (
    approximate_offset,
    find_match_element,
    paginate,
    scroll_to_match,
)
from docviewer.engine.page import HeadlessPage
from docviewer.engine.render import MarkdownRenderer
from docviewer.engine.search import MatchedLine

MATCH_LINE = "Returns the user id for this session"


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# PAGINATION
# =============================================================================


def test_pagination_boundaries(store):
    first = paginate(store, 0)
    assert (first.previous_enabled, first.next_enabled) == (False, True)
    assert first.next_slug == "api"

    middle = paginate(store, 1)
    assert (middle.previous_slug, middle.next_slug) == ("getting-started", "faq")

    last = paginate(store, 2)
    assert (last.previous_enabled, last.next_enabled) == (True, False)
    assert last.next_slug is None


def test_unresolved_index_disables_both_controls(store):
    pagination = paginate(store, -1)
    assert (pagination.previous_enabled, pagination.next_enabled) == (False, False)


# =============================================================================
# ROUTING
# =============================================================================


def test_empty_fragment_shows_first_document(make_viewer):
    viewer = make_viewer("")
    view = run(viewer.start())

    assert view.active_slug == "getting-started"
    assert "<h1>Getting Started</h1>" in view.content_html


def test_nav_click_changes_fragment_then_renders(make_viewer):
    viewer = make_viewer("getting-started")

    async def go():
        await viewer.start()
        return await viewer.dispatch("nav_click", {"slug": "api"})

    view = run(go())

    assert view.fragment == "api"
    assert view.active_slug == "api"
    assert view.render_count == 2
    assert viewer.page.history == ["getting-started", "api"]


def test_activating_active_document_rerenders(make_viewer):
    viewer = make_viewer("faq")

    async def go():
        first = await viewer.start()
        second = await viewer.dispatch("nav_click", {"slug": "faq"})
        return first, second

    first, second = run(go())

    assert first.render_count == 1
    assert second.render_count == 2
    assert second.active_slug == "faq"
    assert "<h1>FAQ</h1>" in second.content_html


def test_unknown_slug_shows_not_found(make_viewer):
    viewer = make_viewer("missing")
    view = run(viewer.start())

    assert view.active_slug == "missing"
    assert "Failed to load Markdown file." in view.content_html
    assert view.pagination.index == -1
    assert view.toc.visible is False


def test_hashchange_event_routes_and_strips_hash(make_viewer):
    viewer = make_viewer("")

    async def go():
        await viewer.start()
        return await viewer.dispatch("hashchange", {"fragment": "#api"})

    view = run(go())
    assert view.active_slug == "api"
    assert view.fragment == "api"


def test_next_and_previous_are_no_ops_at_the_ends(make_viewer):
    viewer = make_viewer("faq")

    async def go():
        await viewer.start()
        at_end = await viewer.dispatch("next")
        back = await viewer.dispatch("previous")
        return at_end, back

    at_end, back = run(go())

    assert at_end.active_slug == "faq"
    assert at_end.render_count == 1
    assert back.active_slug == "api"
    assert back.render_count == 2

    first = make_viewer("getting-started")

    async def go_first():
        await first.start()
        return await first.dispatch("previous")

    view = run(go_first())
    assert view.active_slug == "getting-started"
    assert view.render_count == 1


# =============================================================================
# DEEP LINKS
# =============================================================================


def deep_link_page(markdown: str) -> tuple[HeadlessPage, object]:
    page = HeadlessPage()
    root = page.set_content_html(MarkdownRenderer().render(markdown))
    return page, root


def test_match_scrolls_below_header_and_emphasizes():
    body = "\n\n".join(f"Paragraph {i}." for i in range(12))
    page, root = deep_link_page(f"{body}\n\n{MATCH_LINE}\n\nTail.\n")

    result = scroll_to_match(page, root, MatchedLine(line_index=24, line_text=MATCH_LINE))

    assert result.element.name == "p"
    top, _ = page.element_box(result.element)
    assert result.offset == max(0.0, top - 60 - 20)
    assert page.container.scroll_top == result.offset
    assert page.container.last_scroll_smooth is True
    assert "search-emphasis" in result.element["class"]


def test_most_specific_element_wins():
    page, root = deep_link_page(f"> {MATCH_LINE}\n")

    element = find_match_element(root, MATCH_LINE)
    assert element.name == "p"
    assert element.parent.name == "blockquote"


def test_unrecognizable_line_falls_back_to_approximate_offset():
    page, root = deep_link_page("Intro\n\n- **bold** item\n")

    result = scroll_to_match(page, root, MatchedLine(line_index=2, line_text="- **bold** item"))

    assert result.element is None
    assert result.offset >= 0
    assert page.container.scroll_top == result.offset


def test_fallback_ratio_is_clamped():
    body = "\n\n".join(f"Paragraph {i}." for i in range(40))
    page, root = deep_link_page(body)

    offset = approximate_offset(page, root, 10_000)
    assert offset == max(0.0, page.content_height() - settings.header_height)
    assert approximate_offset(page, root, 0) == 0.0


def test_emphasis_fades(monkeypatch):
    monkeypatch.setattr(settings, "emphasis_seconds", 0.01)
    page, root = deep_link_page(f"{MATCH_LINE}\n")

    async def go():
        result = scroll_to_match(page, root, MatchedLine(line_index=0, line_text=MATCH_LINE))
        assert "search-emphasis" in result.element["class"]
        await asyncio.sleep(0.05)
        return result.element

    element = run(go())
    assert "search-emphasis" not in (element.get("class") or [])
