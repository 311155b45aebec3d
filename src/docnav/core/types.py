"""Core type definitions."""

from typing import NewType

# Document identifier as referenced from sidebars (e.g., "guides/install")
DocId = NewType("DocId", str)

# URL path of a rendered page (e.g., "/docs/category/guides")
Permalink = NewType("Permalink", str)
