"""Viewer engine.

Usage:
    from docviewer.engine import DocViewer, HeadlessPage, load_documents

    store = await load_documents("https://example.com/docs.json")
    viewer = DocViewer(store, HeadlessPage(), renderer=MarkdownRenderer())
    await viewer.start()
    await viewer.dispatch("search_input", {"query": "user id"})
"""

from .core import Document, DocumentStore, load_documents, slugify
from .errors import DocumentNotFoundError, LoadError, RenderError, RendererTimeout, ViewerError
from .page import HeadlessPage, Page, ScrollContainer
from .preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from .render import CodeHighlighter, MarkdownRenderer, RendererGate, UnavailableRenderer
from .viewer import DocViewer

__all__ = [
    # Documents
    "Document",
    "DocumentStore",
    "load_documents",
    "slugify",
    # Errors
    "ViewerError",
    "LoadError",
    "RenderError",
    "DocumentNotFoundError",
    "RendererTimeout",
    # Page surface
    "Page",
    "HeadlessPage",
    "ScrollContainer",
    # Preferences
    "PreferenceStore",
    "MemoryPreferenceStore",
    "JsonPreferenceStore",
    # Rendering
    "MarkdownRenderer",
    "UnavailableRenderer",
    "RendererGate",
    "CodeHighlighter",
    # Controller
    "DocViewer",
]
