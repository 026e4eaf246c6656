"""Plugin and theme tools, including WordPress.org directory search."""

from urllib.parse import quote

from core.tools.registry import ToolResult, error, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import rendered


def format_plugin(plugin: dict) -> dict:
    return {
        "plugin": plugin.get("plugin"),
        "status": plugin.get("status"),
        "name": plugin.get("name"),
        "version": plugin.get("version"),
        "author": plugin.get("author"),
        "description": rendered(plugin.get("description")),
    }


async def resolve_plugin_file(wp: WordPressClient, plugin_file: str = "", slug: str = "") -> str | None:
    """Plugin file ("akismet/akismet.php") given directly or looked up by slug."""
    if plugin_file:
        return plugin_file
    if not slug:
        return None
    for plugin in await wp.call_core_api("/plugins"):
        name = plugin.get("plugin")
        if isinstance(name, str) and name.startswith(f"{slug}/"):
            return name
    return None


async def _set_plugin_status(wp: WordPressClient, plugin_file: str, status: str) -> dict:
    # The plugin file contains "/", which must stay inside a single path segment
    return await wp.call_core_api(f"/plugins/{quote(plugin_file, safe='')}", "PUT", {"status": status})


@tool(
    name="wordpress_get_plugins",
    description="List installed plugins.",
    action="get plugins",
    group="plugins",
)
async def get_plugins(wp: WordPressClient) -> ToolResult:
    plugins = await wp.call_core_api("/plugins")
    return success({"plugins": [format_plugin(p) for p in plugins], "total": len(plugins)}, f"Retrieved {len(plugins)} plugins")


@tool(
    name="wordpress_install_plugin",
    description="Install a plugin by WordPress.org slug or from a zip URL. Optionally activate it.",
    action="install plugin",
    group="plugins",
    parameters={
        "slug": "WordPress.org plugin slug",
        "zip_url": "URL of a plugin zip file",
        "activate": "Activate after install (default false)",
    },
)
async def install_plugin(wp: WordPressClient, slug: str = "", zip_url: str = "", activate: bool = False) -> ToolResult:
    if not slug and not zip_url:
        return error("Provide either slug or zip_url")

    payload = {}
    if slug:
        payload["slug"] = slug
    if zip_url:
        payload["source_url"] = zip_url
        payload["zip_url"] = zip_url
    if activate:
        payload["status"] = "active"

    result = await wp.call_core_api("/plugins", "POST", payload)
    parts = ["Plugin installation complete"]
    if slug:
        parts.append(f"slug: {slug}")
    if activate or result.get("status") == "active":
        parts.append("activated")
    return success(result, " - ".join(parts))


@tool(
    name="wordpress_activate_plugin",
    description="Activate an installed plugin, given its plugin file or its slug.",
    action="activate plugin",
    group="plugins",
    parameters={
        "plugin_file": "Plugin file, e.g. akismet/akismet.php",
        "slug": "Plugin slug, resolved against the installed plugins",
    },
)
async def activate_plugin(wp: WordPressClient, plugin_file: str = "", slug: str = "") -> ToolResult:
    target = await resolve_plugin_file(wp, plugin_file, slug)
    if not target:
        return error("Provide plugin_file (e.g. 'akismet/akismet.php') or the slug of an installed plugin")
    updated = await _set_plugin_status(wp, target, "active")
    return success({"plugin": target, "status": updated.get("status") or "active"}, f"Activated plugin {target}")


@tool(
    name="wordpress_deactivate_plugin",
    description="Deactivate an installed plugin, given its plugin file or its slug.",
    action="deactivate plugin",
    group="plugins",
    parameters={
        "plugin_file": "Plugin file, e.g. akismet/akismet.php",
        "slug": "Plugin slug, resolved against the installed plugins",
    },
)
async def deactivate_plugin(wp: WordPressClient, plugin_file: str = "", slug: str = "") -> ToolResult:
    target = await resolve_plugin_file(wp, plugin_file, slug)
    if not target:
        return error("Provide plugin_file (e.g. 'akismet/akismet.php') or the slug of an installed plugin")
    updated = await _set_plugin_status(wp, target, "inactive")
    return success({"plugin": target, "status": updated.get("status") or "inactive"}, f"Deactivated plugin {target}")


@tool(
    name="wordpress_search_plugins",
    description="Search the WordPress.org plugin directory by keyword.",
    action="search plugins",
    group="plugins",
    parameters={
        "query": "Search keyword",
        "page": "Page number (default 1)",
        "per_page": "Results per page (default 10)",
    },
)
async def search_plugins(wp: WordPressClient, query: str, page: int = 1, per_page: int = 10) -> ToolResult:
    if not query.strip():
        return error("Query is required")
    results = await wp.search_plugin_directory(query, page, per_page)
    return success(
        {"results": results, "count": len(results), "page": page, "per_page": per_page},
        f'Found {len(results)} plugins for "{query}"',
    )


@tool(
    name="wordpress_get_themes",
    description="List installed themes.",
    action="get themes",
    group="plugins",
)
async def get_themes(wp: WordPressClient) -> ToolResult:
    themes = await wp.call_core_api("/themes")
    items = [
        {
            "stylesheet": t.get("stylesheet"),
            "name": rendered(t.get("name")) or t.get("stylesheet"),
            "version": t.get("version"),
            "author": rendered(t.get("author")),
            "status": t.get("status"),
        }
        for t in themes
    ]
    return success({"themes": items, "total": len(items)}, f"Retrieved {len(items)} themes")
