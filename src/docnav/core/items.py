"""Sidebar item model.

A sidebar is an ordered sequence of items. Items form a closed set of
variants distinguished by their ``type`` discriminant:

- ``doc``: leaf referencing a document by id
- ``ref``: cross-reference to a document owned by another sidebar
- ``link``: opaque external or internal href
- ``category``: internal node with ordered children and an optional link

A category link makes the category itself navigable, either as a proxy
for a document (``doc``) or for a synthesized index page
(``generated-index``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, TypeAlias

from docnav.core.types import DocId, Permalink


@dataclass(frozen=True)
class CategoryDocLink:
    """Category link pointing at an existing document."""

    type: ClassVar[Literal["doc"]] = "doc"

    id: DocId

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "id": self.id}


@dataclass(frozen=True)
class CategoryGeneratedIndexLink:
    """Category link pointing at a generated index page."""

    type: ClassVar[Literal["generated-index"]] = "generated-index"

    permalink: Permalink

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "permalink": self.permalink}


CategoryLink: TypeAlias = CategoryDocLink | CategoryGeneratedIndexLink


@dataclass(frozen=True)
class SidebarItemDoc:
    """Sidebar leaf referencing a document."""

    type: ClassVar[Literal["doc"]] = "doc"

    id: DocId
    label: str | None = None
    class_name: str | None = None

    @property
    def resolved_label(self) -> str:
        """Label to display, falling back to the doc id."""
        return self.label if self.label is not None else self.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"type": self.type, "id": self.id}
        if self.label is not None:
            result["label"] = self.label
        if self.class_name is not None:
            result["className"] = self.class_name
        return result


@dataclass(frozen=True)
class SidebarItemRef:
    """Cross-reference to a document; never part of doc ids or navigation."""

    type: ClassVar[Literal["ref"]] = "ref"

    id: DocId
    label: str | None = None
    class_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"type": self.type, "id": self.id}
        if self.label is not None:
            result["label"] = self.label
        if self.class_name is not None:
            result["className"] = self.class_name
        return result


@dataclass(frozen=True)
class SidebarItemLink:
    """Opaque link to an arbitrary href."""

    type: ClassVar[Literal["link"]] = "link"

    href: str
    label: str
    description: str | None = None
    class_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "type": self.type,
            "href": self.href,
            "label": self.label,
        }
        if self.description is not None:
            result["description"] = self.description
        if self.class_name is not None:
            result["className"] = self.class_name
        return result


@dataclass(frozen=True)
class SidebarItemCategory:
    """Internal node grouping items.

    Order of ``items`` defines traversal and navigation order. The
    category is itself navigable when ``link`` is set; its children are
    traversed either way.
    """

    type: ClassVar[Literal["category"]] = "category"

    label: str
    items: tuple[SidebarItem, ...] = field(default_factory=tuple)
    link: CategoryLink | None = None
    collapsed: bool = True
    collapsible: bool = True
    description: str | None = None
    class_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "type": self.type,
            "label": self.label,
            "items": [item.to_dict() for item in self.items],
            "collapsed": self.collapsed,
            "collapsible": self.collapsible,
        }
        if self.link is not None:
            result["link"] = self.link.to_dict()
        if self.description is not None:
            result["description"] = self.description
        if self.class_name is not None:
            result["className"] = self.class_name
        return result


SidebarItem: TypeAlias = (
    SidebarItemDoc | SidebarItemRef | SidebarItemLink | SidebarItemCategory
)

# Items that can be a previous/next target: docs and categories with a link
SidebarNavigationItem: TypeAlias = SidebarItemDoc | SidebarItemCategory

Sidebar: TypeAlias = Sequence[SidebarItem]
Sidebars: TypeAlias = Mapping[str, Sidebar]


def is_categories_shorthand(value: object) -> bool:
    """Check whether a raw value is the ``{label: [items]}`` category shorthand.

    Shorthand is any mapping without a ``type`` key (or with ``type``
    explicitly set to None). Normalized sidebars never contain it.
    """
    return isinstance(value, Mapping) and value.get("type") is None


def sidebar_item_from_dict(data: object, path: str = "item") -> SidebarItem:
    """Parse a normalized sidebar item.

    Args:
        data: Raw item data (as decoded from JSON)
        path: Location of the item, used in error messages

    Returns:
        Parsed sidebar item

    Raises:
        ValueError: If the item is malformed or not normalized
    """
    if is_categories_shorthand(data):
        raise ValueError(
            f"{path} is a categories shorthand; sidebars must be normalized",
        )
    if not isinstance(data, Mapping):
        raise ValueError(f"{path} must be a dictionary")

    item_type = data["type"]
    class_name = _optional_str(data, "className", path)

    if item_type == "doc" or item_type == "ref":
        doc_id = _required_str(data, "id", path)
        label = _optional_str(data, "label", path)
        if item_type == "doc":
            return SidebarItemDoc(id=DocId(doc_id), label=label, class_name=class_name)
        return SidebarItemRef(id=DocId(doc_id), label=label, class_name=class_name)

    if item_type == "link":
        return SidebarItemLink(
            href=_required_str(data, "href", path),
            label=_required_str(data, "label", path),
            description=_optional_str(data, "description", path),
            class_name=class_name,
        )

    if item_type == "category":
        raw_items = data.get("items", [])
        if not isinstance(raw_items, list):
            raise ValueError(f"{path}.items must be a list")
        collapsed = data.get("collapsed", True)
        collapsible = data.get("collapsible", True)
        if not isinstance(collapsed, bool) or not isinstance(collapsible, bool):
            raise ValueError(f"{path}.collapsed and collapsible must be booleans")
        return SidebarItemCategory(
            label=_required_str(data, "label", path),
            items=tuple(
                sidebar_item_from_dict(child, f"{path}.items[{i}]")
                for i, child in enumerate(raw_items)
            ),
            link=_category_link_from_dict(data.get("link"), f"{path}.link"),
            collapsed=collapsed,
            collapsible=collapsible,
            description=_optional_str(data, "description", path),
            class_name=class_name,
        )

    raise ValueError(f"{path}.type has unknown value {item_type!r}")


def sidebars_from_dict(data: object) -> dict[str, tuple[SidebarItem, ...]]:
    """Parse a normalized ``{sidebar name: [items]}`` mapping.

    Raises:
        ValueError: If the mapping or any item is malformed
    """
    if not isinstance(data, Mapping):
        raise ValueError("Sidebars must be a dictionary")

    sidebars: dict[str, tuple[SidebarItem, ...]] = {}
    for name, raw_items in data.items():
        if not isinstance(raw_items, list):
            raise ValueError(f"Sidebar {name} must be a list of items")
        sidebars[name] = tuple(
            sidebar_item_from_dict(item, f"{name}[{i}]")
            for i, item in enumerate(raw_items)
        )
    return sidebars


def sidebars_to_dict(sidebars: Sidebars) -> dict[str, list[dict[str, Any]]]:
    """Convert sidebars to dictionary for JSON serialization."""
    return {
        name: [item.to_dict() for item in items] for name, items in sidebars.items()
    }


def _category_link_from_dict(data: object, path: str) -> CategoryLink | None:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ValueError(f"{path} must be a dictionary")

    link_type = data.get("type")
    if link_type == "doc":
        return CategoryDocLink(id=DocId(_required_str(data, "id", path)))
    if link_type == "generated-index":
        return CategoryGeneratedIndexLink(
            permalink=Permalink(_required_str(data, "permalink", path)),
        )
    raise ValueError(f"{path}.type has unknown value {link_type!r}")


def _required_str(data: Mapping[str, object], key: str, path: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{path}.{key} must be a string")
    return value


def _optional_str(data: Mapping[str, object], key: str, path: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{path}.{key} must be a string")
    return value
