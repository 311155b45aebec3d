"""Loading of normalized sidebars and document metadata.

Both inputs are JSON files produced by the documentation build:

    sidebars.json   {"<sidebar name>": [<normalized items>], ...}
    docs.json       {"<doc id>": {"title", "permalink", "frontMatter"}, ...}

Loaded data is cached and reloaded only when a file's mtime changes.
"""

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from docnav.core.items import SidebarItem, sidebars_from_dict
from docnav.core.links import DocMetadata
from docnav.core.sidebars import SidebarsIndex, create_sidebars_index

logger = logging.getLogger(__name__)


def load_sidebars_file(path: Path) -> dict[str, tuple[SidebarItem, ...]]:
    """Load normalized sidebars from a JSON file.

    Args:
        path: Path to sidebars JSON file

    Returns:
        Sidebars mapping; empty (sidebars disabled) when the file doesn't exist

    Raises:
        ValueError: If the file isn't valid JSON or not normalized sidebars
    """
    data = _read_json(path)
    if data is None:
        return {}
    try:
        return sidebars_from_dict(data)
    except ValueError as e:
        raise ValueError(f"Invalid sidebars file {path}: {e}") from e


def load_docs_file(path: Path) -> dict[str, DocMetadata]:
    """Load document metadata keyed by doc id from a JSON file.

    Returns an empty mapping when the file doesn't exist.

    Raises:
        ValueError: If the file isn't valid JSON or has malformed entries
    """
    data = _read_json(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid docs file {path}: must be a dictionary")

    docs: dict[str, DocMetadata] = {}
    for doc_id, raw_doc in data.items():
        if not isinstance(raw_doc, dict):
            raise ValueError(f"Invalid docs file {path}: {doc_id} must be a dictionary")
        try:
            docs[doc_id] = DocMetadata.from_dict(raw_doc)
        except ValueError as e:
            raise ValueError(f"Invalid docs file {path}: {doc_id}: {e}") from e
    return docs


@dataclass(frozen=True)
class LoadedSidebars:
    """Sidebars index with the document metadata it was loaded with."""

    index: SidebarsIndex
    docs_by_id: dict[str, DocMetadata]


class SidebarsLoader:
    """Loads and caches the sidebars index and document metadata.

    The cached result is reused until the mtime of either file changes.
    """

    def __init__(self, sidebars_path: Path, docs_path: Path) -> None:
        """Initialize loader.

        Args:
            sidebars_path: Path to normalized sidebars JSON file
            docs_path: Path to document metadata JSON file
        """
        self._sidebars_path = sidebars_path
        self._docs_path = docs_path
        self._cached: LoadedSidebars | None = None
        self._cached_mtimes: tuple[float | None, float | None] | None = None
        self._lock = threading.Lock()

    @property
    def sidebars_path(self) -> Path:
        return self._sidebars_path

    @property
    def docs_path(self) -> Path:
        return self._docs_path

    def load(self) -> LoadedSidebars:
        """Load sidebars and docs, reusing the cache when files are unchanged."""
        mtimes = (_mtime(self._sidebars_path), _mtime(self._docs_path))
        with self._lock:
            if self._cached is not None and self._cached_mtimes == mtimes:
                return self._cached

            if self._cached is not None:
                logger.info(f"Reloading sidebars from {self._sidebars_path}")

            sidebars = load_sidebars_file(self._sidebars_path)
            loaded = LoadedSidebars(
                index=create_sidebars_index(sidebars),
                docs_by_id=load_docs_file(self._docs_path),
            )
            self._cached = loaded
            self._cached_mtimes = mtimes
            return loaded

    def invalidate(self) -> None:
        """Drop the cached result so the next load reads the files again."""
        with self._lock:
            self._cached = None
            self._cached_mtimes = None


def _read_json(path: Path) -> object:
    if not path.exists():
        logger.debug(f"{path} not found")
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None
