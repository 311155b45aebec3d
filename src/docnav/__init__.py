"""Docnav - sidebar navigation for documentation sites."""

from docnav.core.errors import SidebarConfigError, SidebarsError, SidebarValidationError
from docnav.core.items import (
    CategoryDocLink,
    CategoryGeneratedIndexLink,
    SidebarItemCategory,
    SidebarItemDoc,
    SidebarItemLink,
    SidebarItemRef,
)
from docnav.core.links import DocMetadata, NavigationLink, to_navigation_link
from docnav.core.sidebars import DocNavigation, SidebarsIndex, create_sidebars_index

__all__ = [
    "CategoryDocLink",
    "CategoryGeneratedIndexLink",
    "DocMetadata",
    "DocNavigation",
    "NavigationLink",
    "SidebarConfigError",
    "SidebarItemCategory",
    "SidebarItemDoc",
    "SidebarItemLink",
    "SidebarItemRef",
    "SidebarValidationError",
    "SidebarsError",
    "SidebarsIndex",
    "create_sidebars_index",
    "to_navigation_link",
]
