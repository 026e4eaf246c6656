"""Page tools, including pages that mount an external React component."""

import json

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_page

REACT_VERSION = "18"

REACT_PAGE_TEMPLATE = """
<div id="react-root"></div>
<script crossorigin src="https://unpkg.com/react@{version}/umd/react.production.min.js"></script>
<script crossorigin src="https://unpkg.com/react-dom@{version}/umd/react-dom.production.min.js"></script>
<script src="{component_url}"></script>
<script>
  const root = ReactDOM.createRoot(document.getElementById('react-root'));
  root.render(React.createElement(window[{component_name}], {props}));
</script>
"""


def react_page_content(component_url: str, component_name: str, props: dict | None = None) -> str:
    """HTML that loads React from unpkg and renders ``window[component_name]`` into #react-root."""
    return REACT_PAGE_TEMPLATE.format(
        version=REACT_VERSION,
        component_url=component_url,
        component_name=json.dumps(component_name),
        props=json.dumps(props or {}),
    )


@tool(
    name="wordpress_create_page",
    description="Create a new WordPress page, optionally under a parent page.",
    action="create page",
    group="pages",
    parameters={
        "title": "Page title",
        "content": "Page content (HTML)",
        "status": "draft, publish, pending or private (default draft)",
        "parent": "Parent page ID (default 0, top level)",
    },
)
async def create_page(
    wp: WordPressClient,
    title: str,
    content: str = "",
    status: str = "draft",
    parent: int = 0,
) -> ToolResult:
    page = await wp.call_core_api("/pages", "POST", {
        "title": title,
        "content": content,
        "status": status,
        "parent": parent,
    })
    return success(format_page(page), f'Created page: "{title}"')


@tool(
    name="wordpress_update_page",
    description="Update an existing page.",
    action="update page",
    group="pages",
    parameters={"page_id": "ID of the page", "updates": "Properties to change"},
)
async def update_page(wp: WordPressClient, page_id: int, updates: dict) -> ToolResult:
    page = await wp.call_core_api(f"/pages/{page_id}", "PUT", updates)
    return success(format_page(page), f"Updated page ID {page_id}")


@tool(
    name="wordpress_get_pages",
    description="List pages with hierarchy information.",
    action="get pages",
    group="pages",
    parameters={
        "per_page": "Results per page (default 10)",
        "page": "Page number (default 1)",
        "parent": "Only children of this page ID",
        "status": "Status filter (default publish)",
    },
)
async def get_pages(
    wp: WordPressClient,
    per_page: int = 10,
    page: int = 1,
    parent: int | None = None,
    status: str = "publish",
) -> ToolResult:
    params = {"per_page": per_page, "page": page, "status": status, "parent": parent}
    pages = await wp.call_core_api("/pages", params=params)
    return success({"pages": [format_page(p) for p in pages], "count": len(pages)}, f"Retrieved {len(pages)} pages")


@tool(
    name="wordpress_delete_page",
    description="Delete a page. Set force=true to skip the trash.",
    action="delete page",
    group="pages",
    parameters={"page_id": "ID of the page", "force": "Skip the trash (default false)"},
)
async def delete_page(wp: WordPressClient, page_id: int, force: bool = False) -> ToolResult:
    await wp.call_core_api(f"/pages/{page_id}", "DELETE", params={"force": "true"} if force else None)
    return success({"id": page_id, "deleted": True}, f"Deleted page ID {page_id}")


@tool(
    name="wordpress_create_react_page",
    description="Create a page that mounts an external React component bundle.",
    action="create React page",
    group="pages",
    parameters={
        "title": "Page title",
        "component_url": "URL of the component bundle",
        "component_name": "Global (window) name the bundle exports the component under",
        "props": "Props passed to the component",
        "status": "publish or draft (default publish)",
    },
)
async def create_react_page(
    wp: WordPressClient,
    title: str,
    component_url: str,
    component_name: str,
    props: dict | None = None,
    status: str = "publish",
) -> ToolResult:
    content = react_page_content(component_url, component_name, props)
    page = await wp.call_core_api("/pages", "POST", {"title": title, "content": content, "status": status})
    return success(page, f"Created React page: {title}")
