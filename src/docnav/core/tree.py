"""Sidebar tree transform and collectors.

All collectors are views over a single pre-order traversal: every item
is visited once at its position, and categories are always descended
into whether or not they carry a link.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import replace
from typing import TypeVar

from docnav.core.items import (
    CategoryDocLink,
    Sidebar,
    SidebarItem,
    SidebarItemCategory,
    SidebarItemDoc,
    SidebarItemLink,
    SidebarItemRef,
    SidebarNavigationItem,
    Sidebars,
)
from docnav.core.types import DocId

T = TypeVar("T")


def transform_sidebar_items(
    sidebar: Sidebar,
    update_fn: Callable[[SidebarItem], SidebarItem],
) -> list[SidebarItem]:
    """Apply ``update_fn`` to every item, preserving tree shape and order.

    Items are visited in pre-order: a category is passed to ``update_fn``
    before any of its descendants. The children of the updated category
    are then transformed recursively and set on it. Input is not mutated.

    Args:
        sidebar: Items to transform
        update_fn: Called once per item, returns the replacement item

    Returns:
        New list of transformed items
    """

    def transform_recursive(item: SidebarItem) -> SidebarItem:
        updated = update_fn(item)
        if isinstance(updated, SidebarItemCategory):
            return replace(
                updated,
                items=tuple(transform_recursive(child) for child in updated.items),
            )
        return updated

    return [transform_recursive(item) for item in sidebar]


def transform_sidebars(
    sidebars: Sidebars,
    update_fn: Callable[[SidebarItem], SidebarItem],
) -> dict[str, list[SidebarItem]]:
    """Apply :func:`transform_sidebar_items` to every sidebar."""
    return {
        name: transform_sidebar_items(items, update_fn)
        for name, items in sidebars.items()
    }


def flatten_sidebar_items(sidebar: Sidebar) -> Iterator[SidebarItem]:
    """Yield every item of the tree in pre-order."""
    for item in sidebar:
        yield item
        if isinstance(item, SidebarItemCategory):
            yield from flatten_sidebar_items(item.items)


def collect_sidebar_doc_items(sidebar: Sidebar) -> list[SidebarItemDoc]:
    return [
        item for item in flatten_sidebar_items(sidebar) if isinstance(item, SidebarItemDoc)
    ]


def collect_sidebar_categories(sidebar: Sidebar) -> list[SidebarItemCategory]:
    """Collect categories, parents before descendants."""
    return [
        item
        for item in flatten_sidebar_items(sidebar)
        if isinstance(item, SidebarItemCategory)
    ]


def collect_sidebar_links(sidebar: Sidebar) -> list[SidebarItemLink]:
    return [
        item for item in flatten_sidebar_items(sidebar) if isinstance(item, SidebarItemLink)
    ]


def collect_sidebar_refs(sidebar: Sidebar) -> list[SidebarItemRef]:
    return [
        item for item in flatten_sidebar_items(sidebar) if isinstance(item, SidebarItemRef)
    ]


def collect_sidebar_doc_ids(sidebar: Sidebar) -> list[DocId]:
    """Collect ids of doc items and of category doc links.

    A category's doc link id is emitted at the category's own position,
    before any id collected from its children.
    """
    doc_ids: list[DocId] = []
    for item in flatten_sidebar_items(sidebar):
        if isinstance(item, SidebarItemDoc):
            doc_ids.append(item.id)
        elif isinstance(item, SidebarItemCategory) and isinstance(
            item.link,
            CategoryDocLink,
        ):
            doc_ids.append(item.link.id)
    return doc_ids


def collect_sidebar_navigation(sidebar: Sidebar) -> list[SidebarNavigationItem]:
    """Collect the items that can be previous/next targets.

    These are doc items and categories carrying a link of either kind.
    Link-less categories are skipped but their descendants still qualify.
    """
    return [
        item
        for item in flatten_sidebar_items(sidebar)
        if isinstance(item, SidebarItemDoc)
        or (isinstance(item, SidebarItemCategory) and item.link is not None)
    ]


def collect_sidebars_doc_ids(sidebars: Sidebars) -> dict[str, list[DocId]]:
    return _map_sidebars(sidebars, collect_sidebar_doc_ids)


def collect_sidebars_navigations(
    sidebars: Sidebars,
) -> dict[str, list[SidebarNavigationItem]]:
    return _map_sidebars(sidebars, collect_sidebar_navigation)


def navigation_item_doc_id(item: SidebarNavigationItem) -> DocId | None:
    """Return the document id a navigation item stands for, if any."""
    if isinstance(item, SidebarItemDoc):
        return item.id
    if isinstance(item.link, CategoryDocLink):
        return item.link.id
    return None


def _map_sidebars(
    sidebars: Sidebars,
    collect: Callable[[Sidebar], list[T]],
) -> dict[str, list[T]]:
    return {name: collect(items) for name, items in sidebars.items()}
