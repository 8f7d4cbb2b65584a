"""Manifest and document loading.

Fetches the manifest, then every document it lists concurrently. The load
is all-or-nothing: a single failed fetch aborts the whole batch with
``LoadError`` and nothing is published.
"""

import asyncio
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from ...config import settings
from ...models.documents import ManifestEntry
from ..errors import LoadError
from .document import Document, DocumentStore

logger = logging.getLogger(__name__)

_manifest_adapter = TypeAdapter(list[ManifestEntry])


async def fetch_manifest(client: httpx.AsyncClient, manifest_url: str) -> list[ManifestEntry]:
    """Fetch and validate the manifest.

    Args:
        client: HTTP client to use
        manifest_url: Absolute URL of the manifest JSON array

    Returns:
        Manifest entries in manifest order

    Raises:
        LoadError: If the request fails, is non-2xx, or the body is not a
            valid manifest
    """
    try:
        response = await client.get(manifest_url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise LoadError(f"Failed to fetch manifest {manifest_url}: {e}") from e

    if not response.is_success:
        raise LoadError(f"Failed to fetch manifest {manifest_url}: HTTP {response.status_code}")

    try:
        return _manifest_adapter.validate_json(response.content)
    except ValidationError as e:
        raise LoadError(f"Invalid manifest {manifest_url}: {e.error_count()} error(s)") from e


async def fetch_document(client: httpx.AsyncClient, manifest_url: str, path: str) -> str:
    """Fetch one markdown document.

    Relative paths are resolved against the manifest URL.

    Raises:
        LoadError: If the path is not a valid URL, the request fails or
            the response is non-2xx
    """
    try:
        url = httpx.URL(manifest_url).join(path)
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise LoadError(f"Failed to load {path}: {e}") from e

    if not response.is_success:
        raise LoadError(f"Failed to load {path}: HTTP {response.status_code}")
    return response.text


async def load_documents(
    manifest_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> DocumentStore:
    """Load the manifest and every document into a published store.

    Args:
        manifest_url: Manifest location (defaults to ``settings.manifest_url``)
        client: Optional HTTP client; one is created and closed if omitted

    Returns:
        The published, read-only document store

    Raises:
        LoadError: If the manifest or any document fetch fails
    """
    manifest_url = manifest_url or settings.manifest_url
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds,
            follow_redirects=True,
        )

    try:
        entries = await fetch_manifest(client, manifest_url)
        documents = [
            Document(
                id=f"doc-{index}",
                title=entry.name,
                path=entry.path,
                section=entry.section,
            )
            for index, entry in enumerate(entries)
        ]

        tasks = [
            asyncio.create_task(fetch_document(client, manifest_url, document.path))
            for document in documents
        ]
        try:
            texts = await asyncio.gather(*tasks)
        except BaseException as e:
            # Fail fast: abandon the rest of the batch
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            if isinstance(e, Exception) and not isinstance(e, LoadError):
                raise LoadError(f"Failed to load documents: {e}") from e
            raise
    finally:
        if owns_client:
            await client.aclose()

    for document, text in zip(documents, texts):
        document.attach_content(text)

    store = DocumentStore(documents).publish()
    logger.info(f"Loaded {len(store)} documents from {manifest_url}")
    return store
