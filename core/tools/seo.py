"""SEO and custom meta tools.

SEO values are stored as Yoast post meta (WooCommerce ``meta_data`` for
products). Yoast 26.6+ also reads from its own indexable table, which only
the companion plugin can write, so that second write is best effort and its
outcome is reported separately in the result.
"""

import logging

from core.tools.registry import ToolResult, error, success, tool
from integrations.wordpress import WordPressClient, WordPressError

logger = logging.getLogger(__name__)

YOAST_META_KEYS = {
    "meta_description": "_yoast_wpseo_metadesc",
    "focus_keyword": "_yoast_wpseo_focuskw",
    "canonical_url": "_yoast_wpseo_canonical",
    "og_title": "_yoast_wpseo_opengraph-title",
    "og_description": "_yoast_wpseo_opengraph-description",
    "twitter_title": "_yoast_wpseo_twitter-title",
    "twitter_description": "_yoast_wpseo_twitter-description",
}

INDEXABLE_FIELDS = {
    "meta_description": "description",
    "focus_keyword": "primary_focus_keyword",
    "og_title": "open_graph_title",
    "og_description": "open_graph_description",
    "twitter_title": "twitter_title",
    "twitter_description": "twitter_description",
    "canonical_url": "canonical",
}


@tool(
    name="wordpress_set_seo_meta",
    description=(
        "Set SEO metadata for a post or a WooCommerce product. Writes Yoast post meta and, "
        "when the companion plugin is installed, the Yoast indexable table (Yoast 26.6+)."
    ),
    action="set SEO meta",
    group="seo",
    parameters={
        "post_id": "Post ID (give post_id or product_id)",
        "product_id": "WooCommerce product ID",
        "meta_description": "Meta description",
        "focus_keyword": "Focus keyphrase",
        "canonical_url": "Canonical URL",
        "og_title": "Open Graph title",
        "og_description": "Open Graph description",
        "twitter_title": "Twitter card title",
        "twitter_description": "Twitter card description",
    },
)
async def set_seo_meta(
    wp: WordPressClient,
    post_id: int | None = None,
    product_id: int | None = None,
    meta_description: str = "",
    focus_keyword: str = "",
    canonical_url: str = "",
    og_title: str = "",
    og_description: str = "",
    twitter_title: str = "",
    twitter_description: str = "",
) -> ToolResult:
    if not post_id and not product_id:
        return error("Provide either post_id or product_id")

    values = {
        "meta_description": meta_description,
        "focus_keyword": focus_keyword,
        "canonical_url": canonical_url,
        "og_title": og_title,
        "og_description": og_description,
        "twitter_title": twitter_title,
        "twitter_description": twitter_description,
    }
    given = {k: v for k, v in values.items() if v}
    meta = {YOAST_META_KEYS[k]: v for k, v in given.items()}

    if product_id:
        target_id, object_type = product_id, "product"
        meta_data = [{"key": k, "value": v} for k, v in meta.items()]
        await wp.call_commerce_api(f"/products/{product_id}", "PUT", {"meta_data": meta_data})
    else:
        target_id, object_type = post_id, "post"
        await wp.call_core_api(f"/posts/{post_id}", "PUT", {"meta": meta})

    indexable = {"object_id": target_id, "object_type": object_type}
    indexable.update({INDEXABLE_FIELDS[k]: v for k, v in given.items()})
    indexable_error = None
    try:
        await wp.call_companion_api("/yoast-indexable", "POST", indexable)
    except WordPressError as e:
        indexable_error = str(e)
        logger.warning(f"Yoast indexable update for {object_type} {target_id} failed: {e}")

    data = {
        f"{object_type}_id": target_id,
        "meta_fields_set": list(meta),
        "yoast_indexable_updated": indexable_error is None,
        "yoast_indexable_error": indexable_error,
    }
    message = f"Set SEO metadata for {object_type} {target_id}"
    if indexable_error is None:
        message += " (+ Yoast indexable)"
    else:
        message += " (Yoast indexable not updated)"
    return success(data, message)


@tool(
    name="wordpress_get_seo_meta",
    description="Read the Yoast SEO metadata of a post or a WooCommerce product.",
    action="get SEO meta",
    group="seo",
    parameters={"post_id": "Post ID (give post_id or product_id)", "product_id": "WooCommerce product ID"},
)
async def get_seo_meta(wp: WordPressClient, post_id: int | None = None, product_id: int | None = None) -> ToolResult:
    if not post_id and not product_id:
        return error("Provide either post_id or product_id")

    by_key = {v: k for k, v in YOAST_META_KEYS.items()}
    if product_id:
        product = await wp.call_commerce_api(f"/products/{product_id}")
        stored = {m.get("key"): m.get("value") for m in product.get("meta_data", []) if isinstance(m, dict)}
        target_id, object_type, head = product_id, "product", {}
    else:
        post = await wp.call_core_api(f"/posts/{post_id}", params={"context": "edit"})
        stored = post.get("meta") or {}
        if not isinstance(stored, dict):
            stored = {}
        target_id, object_type, head = post_id, "post", post.get("yoast_head_json") or {}

    seo = {field: stored.get(key, "") for key, field in by_key.items()}
    data = {f"{object_type}_id": target_id, "seo": seo}
    if head:
        data["yoast_head"] = {k: head.get(k) for k in ("title", "description", "canonical", "og_title", "og_description")}
    return success(data, f"Retrieved SEO metadata for {object_type} {target_id}")


@tool(
    name="wordpress_set_custom_meta",
    description="Set a custom post meta field. The key must be registered for REST access.",
    action="set custom meta",
    group="seo",
    parameters={"post_id": "ID of the post", "meta_key": "Meta key", "meta_value": "Meta value"},
)
async def set_custom_meta(wp: WordPressClient, post_id: int, meta_key: str, meta_value: str) -> ToolResult:
    await wp.call_core_api(f"/posts/{post_id}", "PUT", {"meta": {meta_key: meta_value}})
    return success(
        {"post_id": post_id, "meta_key": meta_key, "meta_value": meta_value, "set": True},
        f'Set custom meta "{meta_key}" for post {post_id}',
    )
