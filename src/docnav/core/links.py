"""Navigation link resolution.

Turns navigation items into renderable links using document metadata
supplied by the documents subsystem.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict

from docnav.core.errors import SidebarConfigError
from docnav.core.items import (
    CategoryDocLink,
    CategoryGeneratedIndexLink,
    SidebarItemCategory,
    SidebarNavigationItem,
)
from docnav.core.sidebars import DocNavigation


class NavigationLinkDict(TypedDict):
    """Dictionary representation of a navigation link."""

    title: str
    permalink: str


@dataclass(frozen=True)
class DocFrontMatter:
    """Front matter fields relevant to navigation."""

    pagination_label: str | None = None
    sidebar_label: str | None = None


@dataclass(frozen=True)
class DocMetadata:
    """Document metadata needed to render a navigation link."""

    title: str
    permalink: str
    front_matter: DocFrontMatter = field(default_factory=DocFrontMatter)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocMetadata:
        """Create metadata from a dictionary.

        Accepts both ``frontMatter`` and ``front_matter`` keys.

        Raises:
            ValueError: If a field has the wrong type
        """
        title = data.get("title")
        if not isinstance(title, str):
            raise ValueError("doc title must be a string")
        permalink = data.get("permalink")
        if not isinstance(permalink, str):
            raise ValueError("doc permalink must be a string")

        front_matter = data.get("frontMatter", data.get("front_matter")) or {}
        if not isinstance(front_matter, Mapping):
            raise ValueError("doc front matter must be a dictionary")
        pagination_label = front_matter.get("pagination_label")
        sidebar_label = front_matter.get("sidebar_label")
        for key, value in (
            ("pagination_label", pagination_label),
            ("sidebar_label", sidebar_label),
        ):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"doc front matter {key} must be a string")

        return cls(
            title=title,
            permalink=permalink,
            front_matter=DocFrontMatter(
                pagination_label=pagination_label,
                sidebar_label=sidebar_label,
            ),
        )


@dataclass(frozen=True)
class NavigationLink:
    """Rendered previous/next link."""

    title: str
    permalink: str

    def to_dict(self) -> NavigationLinkDict:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "permalink": self.permalink}


@dataclass(frozen=True)
class NavigationLinks:
    """Rendered previous/next links of a page."""

    previous: NavigationLink | None = None
    next: NavigationLink | None = None

    def to_dict(self) -> dict[str, NavigationLinkDict | None]:
        """Convert to dictionary for JSON serialization."""
        return {
            "previous": self.previous.to_dict() if self.previous else None,
            "next": self.next.to_dict() if self.next else None,
        }


def to_doc_navigation_link(
    doc: DocMetadata,
    sidebar_item_label: str | None = None,
) -> NavigationLink:
    """Build a navigation link to a document.

    The title is the first defined of: front matter ``pagination_label``,
    front matter ``sidebar_label``, ``sidebar_item_label``, doc title.
    """
    candidates = (
        doc.front_matter.pagination_label,
        doc.front_matter.sidebar_label,
        sidebar_item_label,
    )
    title = next((value for value in candidates if value is not None), doc.title)
    return NavigationLink(title=title, permalink=doc.permalink)


def to_navigation_link(
    item: SidebarNavigationItem | None,
    docs_by_id: Mapping[str, DocMetadata],
) -> NavigationLink | None:
    """Build a navigation link for a navigation item.

    Args:
        item: Doc item or linked category; None yields None
        docs_by_id: Document metadata keyed by doc id

    Returns:
        Navigation link, or None if ``item`` is None

    Raises:
        SidebarConfigError: If the item targets a doc missing from ``docs_by_id``
    """
    if item is None:
        return None

    if isinstance(item, SidebarItemCategory):
        if isinstance(item.link, CategoryGeneratedIndexLink):
            return NavigationLink(title=item.label, permalink=item.link.permalink)
        if isinstance(item.link, CategoryDocLink):
            doc = _get_doc(docs_by_id, item.link.id)
            return to_doc_navigation_link(doc, sidebar_item_label=item.label)
        raise ValueError(f"Category {item.label} has no link to navigate to")

    doc = _get_doc(docs_by_id, item.id)
    return to_doc_navigation_link(doc, sidebar_item_label=item.label)


def to_navigation_links(
    navigation: DocNavigation,
    docs_by_id: Mapping[str, DocMetadata],
) -> NavigationLinks:
    """Resolve both neighbors of a navigation triple into links."""
    return NavigationLinks(
        previous=to_navigation_link(navigation.previous, docs_by_id),
        next=to_navigation_link(navigation.next, docs_by_id),
    )


def _get_doc(docs_by_id: Mapping[str, DocMetadata], doc_id: str) -> DocMetadata:
    doc = docs_by_id.get(doc_id)
    if doc is None:
        raise SidebarConfigError(
            f"Can't create navigation link: no doc found with id={doc_id}",
        )
    return doc
