"""Sidebar error types."""


class SidebarsError(ValueError):
    """Base class for sidebar configuration and validation errors."""


class SidebarConfigError(SidebarsError):
    """A query references a sidebar or document that doesn't exist."""


class SidebarValidationError(SidebarsError):
    """Sidebars reference unknown or legacy document ids or names."""
