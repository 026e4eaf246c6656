"""Post tools - create, read, update, schedule and bulk-edit blog posts."""

import logging

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_post, rendered

logger = logging.getLogger(__name__)


@tool(
    name="wordpress_create_post",
    description="Create a new WordPress post with full control over all post properties.",
    action="create post",
    group="posts",
    parameters={
        "title": "Post title",
        "content": "Post content (HTML)",
        "status": "draft, publish, pending or private (default draft)",
        "categories": "List of category IDs",
        "tags": "List of tag IDs",
    },
)
async def create_post(
    wp: WordPressClient,
    title: str,
    content: str = "",
    status: str = "draft",
    categories: list | None = None,
    tags: list | None = None,
) -> ToolResult:
    body = {"title": title, "content": content, "status": status}
    if categories:
        body["categories"] = categories
    if tags:
        body["tags"] = tags
    post = await wp.call_core_api("/posts", "POST", body)
    return success(format_post(post), f'Created post: "{title}"')


@tool(
    name="wordpress_update_post",
    description="Update an existing post. Any post property can be changed.",
    action="update post",
    group="posts",
    parameters={
        "post_id": "ID of the post to update",
        "updates": "Properties to change (title, content, status, ...)",
    },
)
async def update_post(wp: WordPressClient, post_id: int, updates: dict) -> ToolResult:
    post = await wp.call_core_api(f"/posts/{post_id}", "PUT", updates)
    return success(format_post(post), f"Updated post ID {post_id}")


@tool(
    name="wordpress_delete_post",
    description="Delete a post. Set force=true to delete permanently, otherwise it is moved to the trash.",
    action="delete post",
    group="posts",
    parameters={"post_id": "ID of the post to delete", "force": "Skip the trash (default false)"},
)
async def delete_post(wp: WordPressClient, post_id: int, force: bool = False) -> ToolResult:
    await wp.call_core_api(f"/posts/{post_id}", "DELETE", params=_force(force))
    return success({"id": post_id, "deleted": True}, f"Deleted post ID {post_id}")


@tool(
    name="wordpress_get_posts",
    description="List posts with paging, status filter and ordering.",
    action="get posts",
    group="posts",
    parameters={
        "per_page": "Results per page (default 10)",
        "page": "Page number (default 1)",
        "status": "publish, draft, pending ... (default publish)",
        "orderby": "date, title or modified (default date)",
        "order": "desc or asc (default desc)",
    },
)
async def get_posts(
    wp: WordPressClient,
    per_page: int = 10,
    page: int = 1,
    status: str = "publish",
    orderby: str = "date",
    order: str = "desc",
) -> ToolResult:
    params = {
        "per_page": per_page,
        "page": page,
        "status": status,
        "orderby": orderby,
        "order": order.lower(),
    }
    posts = await wp.call_core_api("/posts", params=params)
    return success({"posts": [format_post(p) for p in posts], "count": len(posts)}, f"Retrieved {len(posts)} posts")


@tool(
    name="wordpress_get_post",
    description="Get detailed information about a specific post by ID, including its content.",
    action="get post",
    group="posts",
    parameters={"post_id": "ID of the post"},
)
async def get_post(wp: WordPressClient, post_id: int) -> ToolResult:
    post = await wp.call_core_api(f"/posts/{post_id}")
    data = format_post(post)
    data["content"] = rendered(post.get("content"))
    data["excerpt"] = rendered(post.get("excerpt"))
    return success(data, f'Retrieved post: "{data["title"]}"')


@tool(
    name="wordpress_search_posts",
    description="Search posts by keyword in title, content and excerpt.",
    action="search posts",
    group="posts",
    parameters={"query": "Search keyword", "per_page": "Results per page (default 10)"},
)
async def search_posts(wp: WordPressClient, query: str, per_page: int = 10) -> ToolResult:
    posts = await wp.call_core_api("/posts", params={"search": query, "per_page": per_page})
    return success(
        {"posts": [format_post(p) for p in posts], "count": len(posts), "query": query},
        f'Found {len(posts)} posts for "{query}"',
    )


@tool(
    name="wordpress_schedule_post",
    description="Schedule a post for future publication. Date format: YYYY-MM-DDTHH:MM:SS.",
    action="schedule post",
    group="posts",
    parameters={"post_id": "ID of the post", "datetime": "Publication date, site timezone"},
)
async def schedule_post(wp: WordPressClient, post_id: int, datetime: str) -> ToolResult:
    post = await wp.call_core_api(f"/posts/{post_id}", "PUT", {"status": "future", "date": datetime})
    return success(format_post(post), f"Scheduled post {post_id} for {datetime}")


@tool(
    name="wordpress_publish_post",
    description="Publish a draft or pending post immediately.",
    action="publish post",
    group="posts",
    parameters={"post_id": "ID of the post"},
)
async def publish_post(wp: WordPressClient, post_id: int) -> ToolResult:
    post = await wp.call_core_api(f"/posts/{post_id}", "PUT", {"status": "publish"})
    return success(format_post(post), f"Published post {post_id}")


@tool(
    name="wordpress_duplicate_post",
    description="Duplicate an existing post as a new draft, optionally with a new title.",
    action="duplicate post",
    group="posts",
    parameters={"post_id": "ID of the post to copy", "new_title": "Title of the copy (default '<title> (Copy)')"},
)
async def duplicate_post(wp: WordPressClient, post_id: int, new_title: str = "") -> ToolResult:
    original = await wp.call_core_api(f"/posts/{post_id}")
    copy = await wp.call_core_api("/posts", "POST", {
        "title": new_title or f"{rendered(original.get('title'))} (Copy)",
        "content": rendered(original.get("content")),
        "status": "draft",
        "categories": original.get("categories", []),
        "tags": original.get("tags", []),
    })
    data = format_post(copy)
    return success(data, f'Duplicated post as "{data["title"]}"')


@tool(
    name="wordpress_get_post_revisions",
    description="Get the revision history of a post.",
    action="get revisions",
    group="posts",
    parameters={"post_id": "ID of the post"},
)
async def get_post_revisions(wp: WordPressClient, post_id: int) -> ToolResult:
    revisions = await wp.call_core_api(f"/posts/{post_id}/revisions")
    items = [
        {"id": r.get("id"), "author": r.get("author"), "date": r.get("date"), "modified": r.get("modified")}
        for r in revisions
    ]
    return success({"revisions": items, "count": len(items)}, f"Found {len(items)} revisions for post {post_id}")


# ==================== Bulk ====================
# Items are processed one at a time, in order. The first failure aborts the batch.

@tool(
    name="wordpress_bulk_create_posts",
    description="Create several posts in one call. Each item is a post body (title, content, status, ...).",
    action="bulk create posts",
    group="posts",
    parameters={"posts": "List of post bodies"},
)
async def bulk_create_posts(wp: WordPressClient, posts: list) -> ToolResult:
    results = []
    for body in posts:
        post = await wp.call_core_api("/posts", "POST", body)
        results.append(format_post(post))
    return success({"posts": results, "count": len(results)}, f"Created {len(results)} posts")


@tool(
    name="wordpress_bulk_update_posts",
    description="Update several posts in one call. Each item needs a post_id plus the properties to change.",
    action="bulk update posts",
    group="posts",
    parameters={"updates": "List of {post_id, ...properties}"},
)
async def bulk_update_posts(wp: WordPressClient, updates: list) -> ToolResult:
    results = []
    for item in updates:
        item = dict(item)
        post_id = item.pop("post_id", None)
        alias = item.pop("postId", None)
        if post_id is None:
            post_id = alias
        if post_id is None:
            raise ValueError("every update needs a post_id")
        post = await wp.call_core_api(f"/posts/{post_id}", "PUT", item)
        results.append(format_post(post))
    return success({"posts": results, "count": len(results)}, f"Updated {len(results)} posts")


@tool(
    name="wordpress_bulk_delete_posts",
    description="Delete several posts in one call.",
    action="bulk delete posts",
    group="posts",
    parameters={"post_ids": "List of post IDs", "force": "Skip the trash (default false)"},
)
async def bulk_delete_posts(wp: WordPressClient, post_ids: list, force: bool = False) -> ToolResult:
    deleted = []
    for post_id in post_ids:
        await wp.call_core_api(f"/posts/{post_id}", "DELETE", params=_force(force))
        deleted.append({"id": post_id, "deleted": True})
    logger.info(f"Bulk deleted {len(deleted)} posts")
    return success({"deleted": deleted, "count": len(deleted)}, f"Deleted {len(deleted)} posts")


def _force(force: bool) -> dict | None:
    return {"force": "true"} if force else None
