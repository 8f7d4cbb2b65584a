"""Tests for the server-side session registry and page bookkeeping."""

import asyncio

from docviewer.config import settings
from docviewer.engine.page import HISTORY_LIMIT, HeadlessPage
from docviewer.api.sessions import SessionRegistry


# =============================================================================
# REGISTRY
# =============================================================================


def test_evicted_session_releases_toc_observer(store, renderer):
    registry = SessionRegistry(max_sessions=1)

    async def go():
        first = await registry.create(store, renderer, fragment="getting-started")
        observers_before = first.viewer.page.container.observer_count
        second = await registry.create(store, renderer, fragment="api")
        return first, second, observers_before

    first, second, observers_before = asyncio.run(go())

    assert observers_before == 1
    assert len(registry) == 1
    assert registry.get(first.id) is None
    assert registry.get(second.id) is second
    assert first.viewer.page.container.observer_count == 0


def test_get_refreshes_recency(store, renderer):
    registry = SessionRegistry(max_sessions=2)

    async def go():
        a = await registry.create(store, renderer)
        b = await registry.create(store, renderer)
        registry.get(a.id)
        c = await registry.create(store, renderer)
        return a, b, c

    a, b, c = asyncio.run(go())

    assert registry.get(a.id) is a
    assert registry.get(b.id) is None
    assert registry.get(c.id) is c


# =============================================================================
# PAGE BOOKKEEPING
# =============================================================================


def test_history_is_capped():
    page = HeadlessPage()

    async def go():
        for index in range(HISTORY_LIMIT + 25):
            await page.set_fragment(f"doc-{index}")

    asyncio.run(go())

    assert len(page.history) == HISTORY_LIMIT
    assert page.history[-1] == f"doc-{HISTORY_LIMIT + 24}"


def test_faded_elements_leave_emphasized(monkeypatch):
    monkeypatch.setattr(settings, "emphasis_seconds", 0.01)
    page = HeadlessPage()
    root = page.set_content_html("<p>one</p><p>one</p>")
    first, second = root.find_all("p")

    async def go():
        page.emphasize(first, settings.emphasis_seconds)
        page.emphasize(second, 10)
        await asyncio.sleep(0.05)

    asyncio.run(go())

    assert len(page.emphasized) == 1
    assert page.emphasized[0] is second


def test_new_content_forgets_emphasized_elements():
    page = HeadlessPage()
    root = page.set_content_html("<p>match</p>")
    page.emphasize(root.p, 2)

    page.set_content_html("<p>other</p>")

    assert page.emphasized == []
