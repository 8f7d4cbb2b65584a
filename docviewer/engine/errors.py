"""Error taxonomy for the viewer engine.

None of these are fatal: each is caught at the boundary of the operation
that raised it and turned into a degraded view (a message in the content
pane, a hidden panel, or a no-op).
"""


class ViewerError(Exception):
    """Base class for viewer engine errors."""

    #: Message shown in the content pane when this error reaches the UI.
    user_message = "Something went wrong."


class LoadError(ViewerError):
    """The manifest or one of the documents could not be fetched."""

    user_message = "Failed to load documentation list."


class RenderError(ViewerError):
    """The markdown renderer raised or is unavailable."""

    user_message = "Failed to render this document."


class DocumentNotFoundError(ViewerError):
    """No document matches the requested slug."""

    user_message = "Failed to load Markdown file."

    def __init__(self, slug: str):
        super().__init__(f"No document with slug '{slug}'")
        self.slug = slug


class RendererTimeout(ViewerError):
    """The renderer did not become ready in time."""
