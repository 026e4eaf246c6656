"""Category and tag tools."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_term


# ==================== Categories ====================

@tool(
    name="wordpress_create_category",
    description="Create a category, optionally nested under a parent.",
    action="create category",
    group="taxonomy",
    parameters={
        "name": "Category name",
        "description": "Category description",
        "parent": "Parent category ID (default 0)",
        "slug": "URL slug",
    },
)
async def create_category(
    wp: WordPressClient,
    name: str,
    description: str = "",
    parent: int = 0,
    slug: str = "",
) -> ToolResult:
    body = {"name": name, "description": description, "parent": parent}
    if slug:
        body["slug"] = slug
    category = await wp.call_core_api("/categories", "POST", body)
    data = {k: category.get(k) for k in ("id", "name", "slug", "parent")}
    return success(data, f'Created category: "{name}"')


@tool(
    name="wordpress_get_categories",
    description="List categories with their hierarchy.",
    action="get categories",
    group="taxonomy",
    parameters={
        "per_page": "Results per page (default 100)",
        "parent": "Only children of this category ID",
        "hide_empty": "Leave out categories without posts (default false)",
    },
)
async def get_categories(
    wp: WordPressClient,
    per_page: int = 100,
    parent: int | None = None,
    hide_empty: bool = False,
) -> ToolResult:
    params = {"per_page": per_page, "hide_empty": hide_empty, "parent": parent}
    categories = await wp.call_core_api("/categories", params=params)
    return success(
        {"categories": [format_term(c) for c in categories], "total": len(categories)},
        f"Retrieved {len(categories)} categories",
    )


@tool(
    name="wordpress_update_category",
    description="Update a category's name, description or parent.",
    action="update category",
    group="taxonomy",
    parameters={"category_id": "ID of the category", "updates": "Properties to change"},
)
async def update_category(wp: WordPressClient, category_id: int, updates: dict) -> ToolResult:
    category = await wp.call_core_api(f"/categories/{category_id}", "PUT", updates)
    return success({"id": category.get("id"), "name": category.get("name")}, f"Updated category ID {category_id}")


@tool(
    name="wordpress_delete_category",
    description="Delete a category.",
    action="delete category",
    group="taxonomy",
    parameters={"category_id": "ID of the category", "force": "Force deletion (default false)"},
)
async def delete_category(wp: WordPressClient, category_id: int, force: bool = False) -> ToolResult:
    await wp.call_core_api(f"/categories/{category_id}", "DELETE", params={"force": "true"} if force else None)
    return success({"id": category_id, "deleted": True}, f"Deleted category ID {category_id}")


# ==================== Tags ====================

@tool(
    name="wordpress_create_tag",
    description="Create a tag.",
    action="create tag",
    group="taxonomy",
    parameters={"name": "Tag name", "description": "Tag description", "slug": "URL slug"},
)
async def create_tag(wp: WordPressClient, name: str, description: str = "", slug: str = "") -> ToolResult:
    body = {"name": name, "description": description}
    if slug:
        body["slug"] = slug
    tag = await wp.call_core_api("/tags", "POST", body)
    return success({k: tag.get(k) for k in ("id", "name", "slug")}, f'Created tag: "{name}"')


@tool(
    name="wordpress_get_tags",
    description="List tags.",
    action="get tags",
    group="taxonomy",
    parameters={
        "per_page": "Results per page (default 100)",
        "hide_empty": "Leave out tags without posts (default false)",
    },
)
async def get_tags(wp: WordPressClient, per_page: int = 100, hide_empty: bool = False) -> ToolResult:
    tags = await wp.call_core_api("/tags", params={"per_page": per_page, "hide_empty": hide_empty})
    items = [{k: t.get(k) for k in ("id", "name", "slug", "count")} for t in tags]
    return success({"tags": items, "total": len(items)}, f"Retrieved {len(items)} tags")


@tool(
    name="wordpress_delete_tag",
    description="Delete a tag. Tags have no trash, so this is always permanent.",
    action="delete tag",
    group="taxonomy",
    parameters={"tag_id": "ID of the tag"},
)
async def delete_tag(wp: WordPressClient, tag_id: int) -> ToolResult:
    await wp.call_core_api(f"/tags/{tag_id}", "DELETE", params={"force": "true"})
    return success({"id": tag_id, "deleted": True}, f"Deleted tag ID {tag_id}")
