"""Site information, connection check and general settings."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_user

SETTINGS_FIELDS = (
    "title",
    "description",
    "url",
    "email",
    "timezone",
    "date_format",
    "time_format",
    "language",
    "posts_per_page",
)


@tool(
    name="wordpress_get_site_info",
    description="Get site information including the available REST namespaces and routes.",
    action="get site info",
    group="site",
)
async def get_site_info(wp: WordPressClient) -> ToolResult:
    info = await wp.call_root_api()
    data = {
        "name": info.get("name"),
        "description": info.get("description"),
        "url": info.get("url"),
        "home": info.get("home"),
        "gmt_offset": info.get("gmt_offset"),
        "timezone_string": info.get("timezone_string"),
        "namespaces": info.get("namespaces", []),
        "authentication": info.get("authentication", {}),
        "routes": list((info.get("routes") or {}).keys()),
    }
    return success(data, f"Site: {data['name']}")


@tool(
    name="wordpress_test_connection",
    description="Test the connection and the configured credentials.",
    action="test connection",
    group="site",
)
async def test_connection(wp: WordPressClient) -> ToolResult:
    user = await wp.call_core_api("/users/me")
    return success({"connected": True, "user": format_user(user)}, f"Connected as {user.get('name')}")


@tool(
    name="wordpress_get_settings",
    description="Get the general site settings.",
    action="get settings",
    group="site",
)
async def get_settings(wp: WordPressClient) -> ToolResult:
    site_settings = await wp.call_core_api("/settings")
    return success({k: site_settings.get(k) for k in SETTINGS_FIELDS}, "Retrieved site settings")


@tool(
    name="wordpress_update_settings",
    description="Update general site settings (title, description, timezone, ...).",
    action="update settings",
    group="site",
    parameters={"settings": "Settings to change, e.g. {\"title\": \"My blog\"}"},
)
async def update_settings(wp: WordPressClient, settings: dict) -> ToolResult:
    updated = await wp.call_core_api("/settings", "PUT", settings)
    return success(updated, "Updated site settings")
