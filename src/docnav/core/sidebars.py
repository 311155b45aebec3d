"""Sidebar index and navigation queries.

The index is built once from a fully normalized sidebar set and is
read-only afterwards, so it can be shared between concurrent requests.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Literal

from docnav.core.errors import SidebarConfigError, SidebarValidationError
from docnav.core.items import (
    CategoryDocLink,
    CategoryGeneratedIndexLink,
    Sidebar,
    SidebarItem,
    SidebarItemCategory,
    SidebarItemDoc,
    SidebarNavigationItem,
    Sidebars,
)
from docnav.core.tree import (
    collect_sidebar_categories,
    collect_sidebars_doc_ids,
    collect_sidebars_navigations,
    navigation_item_doc_id,
)
from docnav.core.types import DocId, Permalink

logger = logging.getLogger(__name__)

_INDEX_CACHE_SIZE = 8


@dataclass(frozen=True)
class DocNavigation:
    """Previous/next neighbors of a page within its sidebar."""

    sidebar_name: str | None = None
    previous: SidebarNavigationItem | None = None
    next: SidebarNavigationItem | None = None


@dataclass(frozen=True)
class FirstDocLink:
    """First navigable document of a sidebar."""

    type: ClassVar[Literal["doc"]] = "doc"

    id: DocId
    label: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "id": self.id, "label": self.label}


@dataclass(frozen=True)
class FirstGeneratedIndexLink:
    """First navigable generated index page of a sidebar."""

    type: ClassVar[Literal["generated-index"]] = "generated-index"

    permalink: Permalink
    label: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "permalink": self.permalink, "label": self.label}


FirstLink = FirstDocLink | FirstGeneratedIndexLink

EMPTY_NAVIGATION = DocNavigation()


class SidebarsIndex:
    """Precomputed lookups over a sidebar set.

    Holds per-sidebar doc ids and navigation lists, the doc id to owning
    sidebar map, and the categories linking to generated indexes.
    """

    __slots__ = (
        "_doc_id_to_sidebar_name",
        "_generated_index_categories",
        "_sidebar_name_to_doc_ids",
        "_sidebar_name_to_navigation",
        "_sidebars",
    )

    def __init__(self, sidebars: Sidebars) -> None:
        """Build the index.

        Args:
            sidebars: Normalized mapping of sidebar name to items
        """
        self._sidebars = {name: tuple(items) for name, items in sidebars.items()}
        self._sidebar_name_to_doc_ids = collect_sidebars_doc_ids(self._sidebars)
        self._sidebar_name_to_navigation = collect_sidebars_navigations(self._sidebars)

        # First sidebar containing a doc id owns it
        self._doc_id_to_sidebar_name: dict[DocId, str] = {}
        for name, doc_ids in self._sidebar_name_to_doc_ids.items():
            for doc_id in doc_ids:
                owner = self._doc_id_to_sidebar_name.setdefault(doc_id, name)
                if owner != name:
                    logger.warning(
                        f"Doc {doc_id} appears in sidebars {owner} and {name}, "
                        f"keeping {owner}",
                    )

        self._generated_index_categories = tuple(
            category
            for items in self._sidebars.values()
            for category in collect_sidebar_categories(items)
            if isinstance(category.link, CategoryGeneratedIndexLink)
        )

        logger.debug(
            f"Built sidebars index: {len(self._sidebars)} sidebars, "
            f"{len(self._doc_id_to_sidebar_name)} docs",
        )

    @property
    def sidebars(self) -> dict[str, tuple[SidebarItem, ...]]:
        """Indexed sidebars, keyed by name."""
        return dict(self._sidebars)

    @property
    def sidebar_names(self) -> list[str]:
        return list(self._sidebars)

    def get_sidebar_doc_ids(self, sidebar_name: str) -> list[DocId]:
        """Get doc ids of a sidebar, empty if the sidebar doesn't exist."""
        return list(self._sidebar_name_to_doc_ids.get(sidebar_name, []))

    def get_sidebar_navigation(self, sidebar_name: str) -> list[SidebarNavigationItem]:
        """Get the unfiltered navigation list of a sidebar."""
        return list(self._sidebar_name_to_navigation.get(sidebar_name, []))

    def get_first_doc_id_of_first_sidebar(self) -> DocId | None:
        """Get the first doc id of the first sidebar, None if there is none."""
        first_doc_ids = next(iter(self._sidebar_name_to_doc_ids.values()), [])
        return first_doc_ids[0] if first_doc_ids else None

    def get_sidebar_name_by_doc_id(self, doc_id: str) -> str | None:
        """Get the name of the sidebar owning a doc, None if not in any sidebar."""
        return self._doc_id_to_sidebar_name.get(DocId(doc_id))

    def get_category_generated_index_list(self) -> list[SidebarItemCategory]:
        """Get categories linking to a generated index, in sidebar order."""
        return list(self._generated_index_categories)

    def get_doc_navigation(
        self,
        doc_id: str,
        displayed_sidebar: str | Literal[False] | None = None,
        unlisted_ids: Iterable[str] = (),
    ) -> DocNavigation:
        """Compute previous/next navigation for a document.

        Args:
            doc_id: Id of the current document
            displayed_sidebar: Sidebar to navigate in. None falls back to the
                sidebar owning the doc; False or "" disables navigation.
            unlisted_ids: Collection of doc ids removed from navigation before
                neighbors are looked up; a single string is rejected

        Returns:
            Navigation triple; neighbors are None when missing

        Raises:
            SidebarConfigError: If ``displayed_sidebar`` names an unknown sidebar
            TypeError: If ``unlisted_ids`` is a string
        """
        if isinstance(unlisted_ids, str):
            raise TypeError("unlisted_ids must be a collection of doc ids, not a string")

        if displayed_sidebar is None:
            sidebar_name = self.get_sidebar_name_by_doc_id(doc_id)
        else:
            sidebar_name = displayed_sidebar
        if not sidebar_name:
            return EMPTY_NAVIGATION

        navigation_items = self._sidebar_name_to_navigation.get(sidebar_name)
        if navigation_items is None:
            raise SidebarConfigError(
                f"Doc with ID {doc_id} wants to display sidebar {sidebar_name} "
                "but a sidebar with this name doesn't exist",
            )

        unlisted = frozenset(unlisted_ids)
        if unlisted:
            navigation_items = [
                item
                for item in navigation_items
                if navigation_item_doc_id(item) not in unlisted
            ]

        current_index = next(
            (
                i
                for i, item in enumerate(navigation_items)
                if navigation_item_doc_id(item) == doc_id
            ),
            None,
        )
        return _navigation_around(sidebar_name, navigation_items, current_index)

    def get_category_generated_index_navigation(self, permalink: str) -> DocNavigation:
        """Compute previous/next navigation for a generated index page.

        Unlisted filtering doesn't apply: generated indexes aren't documents.
        Returns empty navigation when no category links to ``permalink``.
        """

        def is_current(item: SidebarNavigationItem) -> bool:
            return (
                isinstance(item, SidebarItemCategory)
                and isinstance(item.link, CategoryGeneratedIndexLink)
                and item.link.permalink == permalink
            )

        for sidebar_name, navigation_items in self._sidebar_name_to_navigation.items():
            for i, item in enumerate(navigation_items):
                if is_current(item):
                    return _navigation_around(sidebar_name, navigation_items, i)

        return EMPTY_NAVIGATION

    def get_first_link(self, sidebar_name: str) -> FirstLink | None:
        """Find the first doc or generated index reachable in a sidebar.

        Returns None if the sidebar doesn't exist or has no such link.
        """
        sidebar = self._sidebars.get(sidebar_name)
        if sidebar is None:
            return None
        return _first_link(sidebar)

    def check_legacy_versioned_sidebar_names(
        self,
        sidebar_file_path: str,
        version_name: str,
    ) -> None:
        """Reject sidebar names using the legacy ``version-<name>/`` prefix.

        Raises:
            SidebarValidationError: If any sidebar name has the prefix
        """
        illegal_prefix = f"version-{version_name}/"
        legacy_names = [name for name in self._sidebars if name.startswith(illegal_prefix)]
        if legacy_names:
            raise SidebarValidationError(
                f'Invalid sidebar file at "{sidebar_file_path}".\n'
                "These legacy versioned sidebar names are not supported anymore:\n"
                f"{_bullet_list(legacy_names)}\n\n"
                "The legacy versioned sidebar names must be renamed "
                f'(without the "{illegal_prefix}" prefix).',
            )

    def check_sidebars_doc_ids(
        self,
        all_doc_ids: Iterable[str],
        sidebar_file_path: str,
        version_name: str,
    ) -> None:
        """Check that every doc id referenced by the sidebars exists.

        Legacy versioned ids are reported on their own, before unknown ids.

        Args:
            all_doc_ids: Ids of all known documents
            sidebar_file_path: Sidebar file path shown in error messages
            version_name: Docs version, used to detect legacy ids

        Raises:
            SidebarValidationError: If some referenced ids don't exist
        """
        valid_ids = set(all_doc_ids)
        invalid_ids = {
            doc_id
            for doc_ids in self._sidebar_name_to_doc_ids.values()
            for doc_id in doc_ids
            if doc_id not in valid_ids
        }
        if not invalid_ids:
            return

        legacy_prefix = f"version-{version_name}/"
        legacy_ids = [doc_id for doc_id in invalid_ids if doc_id.startswith(legacy_prefix)]
        if legacy_ids:
            raise SidebarValidationError(
                f'Invalid sidebar file at "{sidebar_file_path}".\n'
                "These legacy versioned document ids are not supported anymore:\n"
                f"{_bullet_list(legacy_ids)}\n\n"
                "The legacy versioned document ids must be renamed "
                f'(without the "{legacy_prefix}" prefix).',
            )

        raise SidebarValidationError(
            f'Invalid sidebar file at "{sidebar_file_path}".\n'
            "These sidebar document ids do not exist:\n"
            f"{_bullet_list(invalid_ids)}\n\n"
            "Available document ids are:\n"
            f"{_bullet_list(valid_ids)}\n",
        )


_index_cache: OrderedDict[int, tuple[Sidebars, SidebarsIndex]] = OrderedDict()
_index_cache_lock = threading.Lock()


def create_sidebars_index(sidebars: Sidebars) -> SidebarsIndex:
    """Get the index for a sidebar set, building it on first use.

    Indexes are memoized per sidebar set object; the set must not be
    mutated after it is indexed.
    """
    key = id(sidebars)
    with _index_cache_lock:
        cached = _index_cache.get(key)
        if cached is not None and cached[0] is sidebars:
            _index_cache.move_to_end(key)
            return cached[1]

    index = SidebarsIndex(sidebars)
    with _index_cache_lock:
        _index_cache[key] = (sidebars, index)
        _index_cache.move_to_end(key)
        while len(_index_cache) > _INDEX_CACHE_SIZE:
            _index_cache.popitem(last=False)
    return index


def _navigation_around(
    sidebar_name: str,
    navigation_items: Sequence[SidebarNavigationItem],
    current_index: int | None,
) -> DocNavigation:
    if current_index is None:
        return DocNavigation(sidebar_name=sidebar_name)
    previous = navigation_items[current_index - 1] if current_index > 0 else None
    next_item = (
        navigation_items[current_index + 1]
        if current_index + 1 < len(navigation_items)
        else None
    )
    return DocNavigation(sidebar_name=sidebar_name, previous=previous, next=next_item)


def _first_link(sidebar: Sidebar) -> FirstLink | None:
    for item in sidebar:
        if isinstance(item, SidebarItemDoc):
            return FirstDocLink(id=item.id, label=item.resolved_label)
        if isinstance(item, SidebarItemCategory):
            if isinstance(item.link, CategoryDocLink):
                return FirstDocLink(id=item.link.id, label=item.label)
            if isinstance(item.link, CategoryGeneratedIndexLink):
                return FirstGeneratedIndexLink(
                    permalink=item.link.permalink,
                    label=item.label,
                )
            first_sub_link = _first_link(item.items)
            if first_sub_link is not None:
                return first_sub_link
    return None


def _bullet_list(values: Iterable[str]) -> str:
    return "\n".join(f"- {value}" for value in sorted(values))
