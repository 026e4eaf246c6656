"""Media library tools."""

from core.tools.registry import ToolResult, error, success, tool
from integrations.wordpress import WordPressClient
from integrations.wordpress.formatters import format_media


@tool(
    name="wordpress_upload_media",
    description=(
        "Upload an image or file to the media library. Provide file_url, "
        "or file_base64 with filename, or a local file_path."
    ),
    action="upload media",
    group="media",
    parameters={
        "file_url": "Public URL to download the file from",
        "file_base64": "File contents, base64 encoded (data: URIs accepted)",
        "filename": "Name to store the file under",
        "file_path": "Path of a file on the machine running this server",
    },
)
async def upload_media(
    wp: WordPressClient,
    file_url: str = "",
    file_base64: str = "",
    filename: str = "",
    file_path: str = "",
) -> ToolResult:
    if file_url:
        media = await wp.upload_media_from_url(file_url, filename or None)
    elif file_base64 and filename:
        media = await wp.upload_media_base64(file_base64, filename)
    elif file_path:
        media = await wp.upload_media_file(file_path, filename or None)
    else:
        return error("Provide either file_url, file_base64 with filename, or file_path")
    return success(format_media(media), f"Uploaded: {media.get('source_url')}")


@tool(
    name="wordpress_get_media",
    description="List media library items, optionally filtered by type.",
    action="get media",
    group="media",
    parameters={
        "per_page": "Results per page (default 10)",
        "page": "Page number (default 1)",
        "media_type": "image, video, audio, application ...",
    },
)
async def get_media(wp: WordPressClient, per_page: int = 10, page: int = 1, media_type: str = "") -> ToolResult:
    items = await wp.call_core_api("/media", params={"per_page": per_page, "page": page, "media_type": media_type})
    return success({"media": [format_media(m) for m in items], "count": len(items)}, f"Retrieved {len(items)} media items")


@tool(
    name="wordpress_get_media_item",
    description="Get one media library item by ID.",
    action="get media item",
    group="media",
    parameters={"media_id": "ID of the media item"},
)
async def get_media_item(wp: WordPressClient, media_id: int) -> ToolResult:
    media = await wp.call_core_api(f"/media/{media_id}")
    data = format_media(media)
    data["caption"] = media.get("caption", {})
    data["media_details"] = media.get("media_details", {})
    return success(data, f"Retrieved media ID {media_id}")


@tool(
    name="wordpress_update_media",
    description="Update media metadata (alt text, caption, title, description).",
    action="update media",
    group="media",
    parameters={
        "media_id": "ID of the media item",
        "alt_text": "Alternative text",
        "caption": "Caption",
        "title": "Title",
        "description": "Description",
    },
)
async def update_media(
    wp: WordPressClient,
    media_id: int,
    alt_text: str = "",
    caption: str = "",
    title: str = "",
    description: str = "",
) -> ToolResult:
    fields = {"alt_text": alt_text, "caption": caption, "title": title, "description": description}
    updates = {k: v for k, v in fields.items() if v}
    media = await wp.call_core_api(f"/media/{media_id}", "PUT", updates)
    return success(format_media(media), f"Updated media ID {media_id}")


@tool(
    name="wordpress_delete_media",
    description="Delete a media file from the library.",
    action="delete media",
    group="media",
    parameters={"media_id": "ID of the media item", "force": "Delete permanently (default true; media has no trash)"},
)
async def delete_media(wp: WordPressClient, media_id: int, force: bool = True) -> ToolResult:
    await wp.call_core_api(f"/media/{media_id}", "DELETE", params={"force": str(force).lower()})
    return success({"id": media_id, "deleted": True}, f"Deleted media ID {media_id}")


@tool(
    name="wordpress_set_featured_image",
    description="Set the featured image (thumbnail) of a post.",
    action="set featured image",
    group="media",
    parameters={"post_id": "ID of the post", "media_id": "ID of the image"},
)
async def set_featured_image(wp: WordPressClient, post_id: int, media_id: int) -> ToolResult:
    await wp.call_core_api(f"/posts/{post_id}", "PUT", {"featured_media": media_id})
    return success({"post_id": post_id, "media_id": media_id, "set": True}, f"Set featured image for post {post_id}")
