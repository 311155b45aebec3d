"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docnav.core.loader import SidebarsLoader

sidebars_loader_key = web.AppKey("sidebars_loader", SidebarsLoader)
