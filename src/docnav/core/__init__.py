"""Sidebar tree algebra and navigation queries."""
