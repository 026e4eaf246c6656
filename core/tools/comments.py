"""Comment moderation tools."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_comment


@tool(
    name="wordpress_create_comment",
    description="Create a comment on a post.",
    action="create comment",
    group="comments",
    parameters={
        "post_id": "ID of the post to comment on",
        "content": "Comment text",
        "author": "Author name",
        "author_email": "Author email",
    },
)
async def create_comment(
    wp: WordPressClient,
    post_id: int,
    content: str,
    author: str = "",
    author_email: str = "",
) -> ToolResult:
    body = {"post": post_id, "content": content}
    if author:
        body["author_name"] = author
    if author_email:
        body["author_email"] = author_email
    comment = await wp.call_core_api("/comments", "POST", body)
    return success(format_comment(comment), f"Created comment on post {post_id}")


@tool(
    name="wordpress_get_comments",
    description="List comments, filtered by post and status.",
    action="get comments",
    group="comments",
    parameters={
        "post_id": "Only comments on this post",
        "per_page": "Results per page (default 10)",
        "status": "approve, hold or spam (default approve)",
    },
)
async def get_comments(
    wp: WordPressClient,
    post_id: int | None = None,
    per_page: int = 10,
    status: str = "approve",
) -> ToolResult:
    comments = await wp.call_core_api("/comments", params={"post": post_id, "per_page": per_page, "status": status})
    return success(
        {"comments": [format_comment(c) for c in comments], "count": len(comments)},
        f"Retrieved {len(comments)} comments",
    )


@tool(
    name="wordpress_update_comment",
    description="Update a comment: approve, hold, spam, trash or edit its content.",
    action="update comment",
    group="comments",
    parameters={
        "comment_id": "ID of the comment",
        "status": "approve, hold, spam or trash",
        "content": "New comment text",
    },
)
async def update_comment(wp: WordPressClient, comment_id: int, status: str = "", content: str = "") -> ToolResult:
    updates = {}
    if status:
        updates["status"] = status
    if content:
        updates["content"] = content
    comment = await wp.call_core_api(f"/comments/{comment_id}", "PUT", updates)
    return success(format_comment(comment), f"Updated comment ID {comment_id}")


@tool(
    name="wordpress_delete_comment",
    description="Delete a comment. Set force=true to skip the trash.",
    action="delete comment",
    group="comments",
    parameters={"comment_id": "ID of the comment", "force": "Skip the trash (default false)"},
)
async def delete_comment(wp: WordPressClient, comment_id: int, force: bool = False) -> ToolResult:
    await wp.call_core_api(f"/comments/{comment_id}", "DELETE", params={"force": "true"} if force else None)
    return success({"id": comment_id, "deleted": True}, f"Deleted comment ID {comment_id}")
