"""Engine core module.

This module contains the document data structures and the loader that
fills the store from the manifest.
"""

from .document import Document, DocumentStore, slugify
from .loader import fetch_document, fetch_manifest, load_documents

__all__ = [
    # Document structures
    "Document",
    "DocumentStore",
    "slugify",
    # Loading
    "fetch_manifest",
    "fetch_document",
    "load_documents",
]
