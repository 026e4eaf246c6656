"""Reshape WordPress REST objects into compact dicts for tool output."""

import re
from typing import Any

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(text: str | None) -> str:
    return _TAG_RE.sub("", text or "")


def truncate(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    return text[:length] + "..."


def rendered(field: Any) -> str:
    """Value of a WordPress ``{"rendered": ...}`` field, or the field itself if plain."""
    if isinstance(field, dict):
        return field.get("rendered") or field.get("raw") or ""
    return field or ""


def clean_params(params: dict | None) -> dict:
    """Drop empty query values; lists become comma-separated (WP array args)."""
    if not params:
        return {}
    cleaned = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        cleaned[key] = value
    return cleaned


def format_post(post: dict) -> dict:
    return {
        "id": post.get("id"),
        "title": rendered(post.get("title")),
        "status": post.get("status"),
        "slug": post.get("slug"),
        "date": post.get("date"),
        "modified": post.get("modified"),
        "link": post.get("link"),
        "excerpt": strip_html(rendered(post.get("excerpt")))[:150],
    }


def format_page(page: dict) -> dict:
    return {
        "id": page.get("id"),
        "title": rendered(page.get("title")),
        "status": page.get("status"),
        "slug": page.get("slug"),
        "link": page.get("link"),
        "parent": page.get("parent", 0),
        "menu_order": page.get("menu_order", 0),
        "template": page.get("template", ""),
    }


def format_user(user: dict) -> dict:
    return {
        "id": user.get("id"),
        "username": user.get("username"),
        "name": user.get("name"),
        "email": user.get("email", ""),
        "roles": user.get("roles", []),
        "link": user.get("link"),
    }


def format_comment(comment: dict) -> dict:
    return {
        "id": comment.get("id"),
        "post": comment.get("post"),
        "author": comment.get("author_name"),
        "content": strip_html(rendered(comment.get("content"))),
        "date": comment.get("date"),
        "status": comment.get("status"),
    }


def format_media(media: dict) -> dict:
    return {
        "id": media.get("id"),
        "title": rendered(media.get("title")),
        "url": media.get("source_url"),
        "type": media.get("media_type"),
        "mime_type": media.get("mime_type"),
        "alt_text": media.get("alt_text", ""),
    }


def format_term(term: dict) -> dict:
    """Category or tag."""
    return {
        "id": term.get("id"),
        "name": term.get("name"),
        "slug": term.get("slug"),
        "count": term.get("count", 0),
        "parent": term.get("parent", 0),
    }
