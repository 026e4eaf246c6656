"""Custom post type tools. ``post_type`` is the REST base of the type, e.g. "portfolio"."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import rendered


def _base(post_type: str) -> str:
    base = post_type.strip().strip("/")
    if not base:
        raise ValueError("post_type must not be empty")
    return f"/{base}"


@tool(
    name="wordpress_get_post_types",
    description="List the registered post types and their REST bases.",
    action="get post types",
    group="custom_types",
)
async def get_post_types(wp: WordPressClient) -> ToolResult:
    types = await wp.call_core_api("/types")
    items = [
        {
            "slug": t.get("slug", key),
            "name": t.get("name"),
            "description": t.get("description", ""),
            "hierarchical": t.get("hierarchical", False),
            "rest_base": t.get("rest_base", key),
        }
        for key, t in types.items()
    ]
    return success({"post_types": items, "count": len(items)}, f"Retrieved {len(items)} post types")


@tool(
    name="wordpress_get_cpt",
    description="List items of a custom post type.",
    action="get custom post type items",
    group="custom_types",
    parameters={"post_type": "REST base of the post type", "params": "Extra query parameters (per_page, search, ...)"},
)
async def get_cpt(wp: WordPressClient, post_type: str, params: dict | None = None) -> ToolResult:
    items = await wp.call_core_api(_base(post_type), params=params)
    return success(
        {"items": items, "count": len(items), "type": post_type},
        f"Retrieved {len(items)} items from {post_type}",
    )


@tool(
    name="wordpress_create_cpt",
    description="Create an item of a custom post type.",
    action="create custom post type item",
    group="custom_types",
    parameters={"post_type": "REST base of the post type", "data": "Item body (title, content, status, ...)"},
)
async def create_cpt(wp: WordPressClient, post_type: str, data: dict) -> ToolResult:
    item = await wp.call_core_api(_base(post_type), "POST", data)
    return success(item, f"Created {post_type} item {rendered(item.get('title')) or item.get('id')}")


@tool(
    name="wordpress_update_cpt",
    description="Update an item of a custom post type.",
    action="update custom post type item",
    group="custom_types",
    parameters={"post_type": "REST base of the post type", "id": "Item ID", "data": "Properties to change"},
)
async def update_cpt(wp: WordPressClient, post_type: str, id: int, data: dict) -> ToolResult:
    item = await wp.call_core_api(f"{_base(post_type)}/{id}", "PUT", data)
    return success(item, f"Updated {post_type} {id}")


@tool(
    name="wordpress_delete_cpt",
    description="Delete an item of a custom post type.",
    action="delete custom post type item",
    group="custom_types",
    parameters={"post_type": "REST base of the post type", "id": "Item ID", "force": "Skip the trash (default false)"},
)
async def delete_cpt(wp: WordPressClient, post_type: str, id: int, force: bool = False) -> ToolResult:
    await wp.call_core_api(f"{_base(post_type)}/{id}", "DELETE", params={"force": "true"} if force else None)
    return success({"type": post_type, "id": id, "deleted": True}, f"Deleted {post_type} {id}")
