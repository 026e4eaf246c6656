"""User management tools."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_user


@tool(
    name="wordpress_create_user",
    description="Create a new WordPress user with roles.",
    action="create user",
    group="users",
    parameters={
        "username": "Login name",
        "email": "Email address",
        "password": "Password",
        "roles": "List of roles (default ['subscriber'])",
        "name": "Display name",
    },
)
async def create_user(
    wp: WordPressClient,
    username: str,
    email: str,
    password: str,
    roles: list | None = None,
    name: str = "",
) -> ToolResult:
    body = {
        "username": username,
        "email": email,
        "password": password,
        "roles": roles or ["subscriber"],
    }
    if name:
        body["name"] = name
    user = await wp.call_core_api("/users", "POST", body)
    return success(format_user(user), f"Created user: {username}")


@tool(
    name="wordpress_get_users",
    description="List users, optionally filtered by role or search term.",
    action="get users",
    group="users",
    parameters={
        "per_page": "Results per page (default 10)",
        "page": "Page number (default 1)",
        "roles": "Role filter, e.g. editor",
        "search": "Search term",
    },
)
async def get_users(
    wp: WordPressClient,
    per_page: int = 10,
    page: int = 1,
    roles: str = "",
    search: str = "",
) -> ToolResult:
    params = {"per_page": per_page, "page": page, "roles": roles, "search": search}
    users = await wp.call_core_api("/users", params=params)
    return success({"users": [format_user(u) for u in users], "count": len(users)}, f"Retrieved {len(users)} users")


@tool(
    name="wordpress_get_current_user",
    description="Get the user the server is authenticated as.",
    action="get current user",
    group="users",
)
async def get_current_user(wp: WordPressClient) -> ToolResult:
    user = await wp.call_core_api("/users/me", params={"context": "edit"})
    return success(format_user(user), f"Authenticated as {user.get('name')}")


@tool(
    name="wordpress_update_user",
    description="Update user information (name, email, roles, password).",
    action="update user",
    group="users",
    parameters={"user_id": "ID of the user", "updates": "Properties to change"},
)
async def update_user(wp: WordPressClient, user_id: int, updates: dict) -> ToolResult:
    user = await wp.call_core_api(f"/users/{user_id}", "PUT", updates)
    return success(format_user(user), f"Updated user ID {user_id}")


@tool(
    name="wordpress_delete_user",
    description="Delete a user, optionally reassigning their content to another user.",
    action="delete user",
    group="users",
    parameters={"user_id": "ID of the user", "reassign": "ID of the user who receives the content"},
)
async def delete_user(wp: WordPressClient, user_id: int, reassign: int | None = None) -> ToolResult:
    # Users have no trash, so WordPress insists on force=true
    await wp.call_core_api(f"/users/{user_id}", "DELETE", params={"force": "true", "reassign": reassign})
    return success({"id": user_id, "deleted": True}, f"Deleted user ID {user_id}")
