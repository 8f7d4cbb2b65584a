"""Documentation viewer service.

Loads a manifest of markdown documents and keeps search, hash routing,
pagination and table-of-contents state consistent for each viewer.
"""

__version__ = "0.1.0"
