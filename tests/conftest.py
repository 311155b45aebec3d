"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from docnav.core.items import (
    CategoryDocLink,
    CategoryGeneratedIndexLink,
    SidebarItem,
    SidebarItemCategory,
    SidebarItemDoc,
    SidebarItemLink,
    SidebarItemRef,
)


@pytest.fixture
def sidebar() -> list[SidebarItem]:
    """Sidebar mixing every item kind, with a linked and a plain category."""
    return [
        SidebarItemDoc(id="d1"),
        SidebarItemCategory(
            label="Cat",
            link=CategoryDocLink(id="cat-index"),
            items=(
                SidebarItemLink(href="https://example.com", label="external"),
                SidebarItemDoc(id="d2"),
                SidebarItemRef(id="d-ref"),
                SidebarItemCategory(label="SubCat", items=(SidebarItemDoc(id="d3"),)),
            ),
        ),
    ]


@pytest.fixture
def sidebars() -> dict[str, list[SidebarItem]]:
    """Two sidebars: one with a doc-linked category, one with a generated index."""
    first: list[SidebarItem] = [
        SidebarItemDoc(id="a"),
        SidebarItemCategory(
            label="Cat1",
            link=CategoryDocLink(id="cat1"),
            items=(
                SidebarItemDoc(id="b", label="Bee"),
                SidebarItemCategory(label="Sub", items=(SidebarItemDoc(id="c"),)),
            ),
        ),
        SidebarItemLink(href="https://example.com", label="ext"),
    ]
    second: list[SidebarItem] = [
        SidebarItemCategory(
            label="Gen",
            link=CategoryGeneratedIndexLink(permalink="/generated/gen"),
            items=(SidebarItemDoc(id="d"),),
        ),
        SidebarItemDoc(id="e"),
    ]
    return {"first": first, "second": second}


@pytest.fixture
def sidebars_data() -> dict[str, list[dict[str, object]]]:
    """Normalized sidebars as they appear in sidebars.json."""
    return {
        "guides": [
            {"type": "doc", "id": "intro", "label": "Introduction"},
            {
                "type": "category",
                "label": "Setup",
                "link": {"type": "doc", "id": "setup/index"},
                "items": [
                    {"type": "doc", "id": "setup/install"},
                    {"type": "link", "label": "GitHub", "href": "https://github.com"},
                ],
            },
            {
                "type": "category",
                "label": "Reference",
                "link": {"type": "generated-index", "permalink": "/category/reference"},
                "items": [{"type": "doc", "id": "reference/api"}],
            },
        ],
    }


@pytest.fixture
def docs_data() -> dict[str, dict[str, object]]:
    """Document metadata as it appears in docs.json."""
    return {
        "intro": {"title": "Welcome", "permalink": "/intro", "frontMatter": {}},
        "setup/index": {
            "title": "Setup Overview",
            "permalink": "/setup",
            "frontMatter": {"pagination_label": "Setup"},
        },
        "setup/install": {
            "title": "Installing",
            "permalink": "/setup/install",
            "frontMatter": {"sidebar_label": "Install"},
        },
        "reference/api": {"title": "API", "permalink": "/reference/api"},
    }


@pytest.fixture
def data_dir(
    tmp_path: Path,
    sidebars_data: dict[str, object],
    docs_data: dict[str, object],
) -> Path:
    """Directory with sidebars.json and docs.json written from fixtures."""
    data = tmp_path / "site"
    data.mkdir()
    (data / "sidebars.json").write_text(json.dumps(sidebars_data))
    (data / "docs.json").write_text(json.dumps(docs_data))
    return data
