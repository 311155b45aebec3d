"""Navigation API endpoints.

Provides sidebar listing, first link, and previous/next navigation
for documents and generated index pages.
"""

from aiohttp import web

from docnav.app_keys import sidebars_loader_key
from docnav.core.errors import SidebarConfigError
from docnav.core.links import to_navigation_links
from docnav.core.loader import LoadedSidebars
from docnav.core.sidebars import DocNavigation


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/sidebars", get_sidebars),
        web.get("/api/sidebars/{name}/first-link", get_first_link),
        web.get("/api/navigation/docs/{doc_id:.*}", get_doc_navigation),
        web.get("/api/navigation/generated-index", get_generated_index_navigation),
    ]


async def get_sidebars(request: web.Request) -> web.Response:
    loaded = request.app[sidebars_loader_key].load()
    return web.json_response({"sidebars": loaded.index.sidebar_names})


async def get_first_link(request: web.Request) -> web.Response:
    name = request.match_info["name"]
    loaded = request.app[sidebars_loader_key].load()

    first_link = loaded.index.get_first_link(name)
    if first_link is None:
        return web.json_response(
            {"error": "Sidebar link not found", "sidebar": name},
            status=404,
        )
    return web.json_response(first_link.to_dict())


async def get_doc_navigation(request: web.Request) -> web.Response:
    """Return previous/next links of a document.

    Query parameters:
        sidebar: Sidebar to navigate in, "false" or empty to disable
        unlisted: Comma-separated doc ids to exclude from navigation
    """
    doc_id = request.match_info["doc_id"]
    loaded = request.app[sidebars_loader_key].load()

    sidebar = request.query.get("sidebar")
    displayed_sidebar = False if sidebar == "false" else sidebar
    unlisted_ids = [
        unlisted_id
        for unlisted_id in request.query.get("unlisted", "").split(",")
        if unlisted_id
    ]

    try:
        navigation = loaded.index.get_doc_navigation(
            doc_id,
            displayed_sidebar=displayed_sidebar,
            unlisted_ids=unlisted_ids,
        )
        return _navigation_response(navigation, loaded)
    except SidebarConfigError as e:
        return web.json_response({"error": str(e), "docId": doc_id}, status=404)


async def get_generated_index_navigation(request: web.Request) -> web.Response:
    permalink = request.query.get("permalink")
    if not permalink:
        return web.json_response({"error": "permalink is required"}, status=400)

    loaded = request.app[sidebars_loader_key].load()
    navigation = loaded.index.get_category_generated_index_navigation(permalink)
    try:
        return _navigation_response(navigation, loaded)
    except SidebarConfigError as e:
        return web.json_response({"error": str(e), "permalink": permalink}, status=404)


def _navigation_response(
    navigation: DocNavigation,
    loaded: LoadedSidebars,
) -> web.Response:
    links = to_navigation_links(navigation, loaded.docs_by_id)
    return web.json_response({"sidebarName": navigation.sidebar_name, **links.to_dict()})
