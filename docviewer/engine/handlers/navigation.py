"""Navigation event handlers.

Handles:
- hashchange: The location fragment changed
- nav_click: A document link in the navigation panel was clicked
- section_toggle: A navigation section header was clicked
- next / previous: Pagination controls
"""

from typing import Any

from .base import ViewerContext


async def handle_hashchange(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Deliver a fragment change coming from outside the viewer.

    Args:
        params: Dict containing:
            - fragment: New location fragment (with or without '#')
    """
    fragment = str(params.get("fragment", "")).lstrip("#")
    if fragment != ctx.page.fragment:
        await ctx.page.set_fragment(fragment)
    else:
        await ctx.router.on_fragment_change(fragment)


async def handle_nav_click(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Activate a document; clicking the active one re-renders it.

    Args:
        params: Dict containing:
            - slug: Slug of the clicked document
    """
    slug = params.get("slug")
    if not slug:
        raise ValueError("Invalid parameter: nav_click requires 'slug'")
    await ctx.router.activate(slug)


async def handle_section_toggle(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Expand or collapse a navigation section.

    Args:
        params: Dict containing:
            - label: Section label
    """
    label = params.get("label")
    if not label:
        raise ValueError("Invalid parameter: section_toggle requires 'label'")
    expanded = ctx.state.expanded_sections
    if label in expanded:
        expanded.discard(label)
    else:
        expanded.add(label)


async def handle_next(params: dict[str, Any], ctx: ViewerContext) -> None:
    await ctx.router.next()


async def handle_previous(params: dict[str, Any], ctx: ViewerContext) -> None:
    await ctx.router.previous()
