"""Tests for individual tool handlers, run through the registry with a mocked client."""

from unittest.mock import call

from core.tools.pages import react_page_content
from integrations.wordpress import WordPressAPIError


def not_found(body="gone"):
    return WordPressAPIError.from_response("WordPress", 404, "Not Found", body)


class TestPostTools:
    """Posts group."""

    async def test_get_posts_defaults(self, registry, wp):
        wp.call_core_api.return_value = []
        result = await registry.execute("wordpress_get_posts", {"order": "ASC"})
        assert result.success
        wp.call_core_api.assert_awaited_once_with("/posts", params={
            "per_page": 10,
            "page": 1,
            "status": "publish",
            "orderby": "date",
            "order": "asc",
        })

    async def test_create_post_only_sends_given_terms(self, registry, wp):
        wp.call_core_api.return_value = {"id": 3, "title": {"rendered": "Hello"}, "status": "draft"}
        result = await registry.execute("wordpress_create_post", {"title": "Hello", "tags": [4]})
        assert result.success
        assert result.data["id"] == 3
        wp.call_core_api.assert_awaited_once_with(
            "/posts", "POST", {"title": "Hello", "content": "", "status": "draft", "tags": [4]}
        )

    async def test_post_excerpt_is_stripped_and_cut(self, registry, wp):
        wp.call_core_api.return_value = [{"id": 1, "excerpt": {"rendered": "<p>" + "word " * 60 + "</p>"}}]
        result = await registry.execute("wordpress_get_posts", {})
        excerpt = result.data["posts"][0]["excerpt"]
        assert "<p>" not in excerpt
        assert len(excerpt) == 150

    async def test_duplicate_post_creates_a_draft_copy(self, registry, wp):
        wp.call_core_api.side_effect = [
            {"id": 8, "title": {"rendered": "Launch"}, "content": {"rendered": "<p>Body</p>"}, "categories": [2], "tags": [5]},
            {"id": 9, "title": {"rendered": "Launch (Copy)"}, "status": "draft"},
        ]
        result = await registry.execute("wordpress_duplicate_post", {"post_id": 8})
        assert result.success
        assert result.data["id"] == 9
        assert wp.call_core_api.await_args_list[1] == call("/posts", "POST", {
            "title": "Launch (Copy)",
            "content": "<p>Body</p>",
            "status": "draft",
            "categories": [2],
            "tags": [5],
        })

    async def test_bulk_delete_runs_in_order(self, registry, wp):
        wp.call_core_api.return_value = {}
        result = await registry.execute("wordpress_bulk_delete_posts", {"post_ids": [3, 1, 2], "force": True})
        assert result.success
        assert result.data["count"] == 3
        assert wp.call_core_api.await_args_list == [
            call("/posts/3", "DELETE", params={"force": "true"}),
            call("/posts/1", "DELETE", params={"force": "true"}),
            call("/posts/2", "DELETE", params={"force": "true"}),
        ]

    async def test_bulk_delete_aborts_on_first_failure(self, registry, wp):
        wp.call_core_api.side_effect = [{}, not_found(), {}, {}]
        result = await registry.execute("wordpress_bulk_delete_posts", {"post_ids": [10, 11, 12, 13]})
        assert not result.success
        assert result.message.startswith("Failed to bulk delete posts: ")
        assert "404" in result.message
        assert wp.call_core_api.await_count == 2
        assert [c.args[0] for c in wp.call_core_api.await_args_list] == ["/posts/10", "/posts/11"]

    async def test_bulk_update_needs_post_id(self, registry, wp):
        result = await registry.execute("wordpress_bulk_update_posts", {"updates": [{"title": "x"}]})
        assert not result.success
        assert "post_id" in result.message
        wp.call_core_api.assert_not_called()

    async def test_bulk_update_splits_id_from_fields(self, registry, wp):
        wp.call_core_api.return_value = {"id": 4}
        await registry.execute("wordpress_bulk_update_posts", {"updates": [{"post_id": 4, "status": "draft"}]})
        wp.call_core_api.assert_awaited_once_with("/posts/4", "PUT", {"status": "draft"})

    async def test_bulk_update_accepts_zero_and_drops_alias(self, registry, wp):
        wp.call_core_api.return_value = {"id": 0}
        result = await registry.execute("wordpress_bulk_update_posts", {
            "updates": [{"post_id": 0, "postId": 9, "title": "x"}, {"postId": 5, "status": "draft"}],
        })
        assert result.success
        assert wp.call_core_api.await_args_list == [
            call("/posts/0", "PUT", {"title": "x"}),
            call("/posts/5", "PUT", {"status": "draft"}),
        ]


class TestPageAndMediaTools:
    """Pages and media groups."""

    def test_react_page_content(self):
        html = react_page_content("https://cdn.example.com/app.js", "PricingTable", {"plan": "pro"})
        assert '<script src="https://cdn.example.com/app.js"></script>' in html
        assert "ReactDOM.createRoot(document.getElementById('react-root'))" in html
        assert 'React.createElement(window["PricingTable"], {"plan": "pro"})' in html
        assert "react@18/umd/react.production.min.js" in html

    async def test_create_react_page_publishes_by_default(self, registry, wp):
        wp.call_core_api.return_value = {"id": 12}
        await registry.execute("wordpress_create_react_page", {
            "title": "Pricing",
            "component_url": "https://cdn.example.com/app.js",
            "component_name": "PricingTable",
        })
        endpoint, method, body = wp.call_core_api.await_args.args
        assert (endpoint, method) == ("/pages", "POST")
        assert body["status"] == "publish"
        assert 'window["PricingTable"], {}' in body["content"]

    async def test_upload_media_needs_a_source(self, registry, wp):
        result = await registry.execute("wordpress_upload_media", {"filename": "a.png"})
        assert not result.success
        assert "file_url" in result.message
        wp.upload_media_base64.assert_not_called()

    async def test_upload_media_prefers_url(self, registry, wp):
        wp.upload_media_from_url.return_value = {"id": 2, "source_url": "https://blog.example.com/a.png"}
        result = await registry.execute("wordpress_upload_media", {"file_url": "https://cdn.example.com/a.png"})
        assert result.success
        assert result.data["url"] == "https://blog.example.com/a.png"
        wp.upload_media_from_url.assert_awaited_once_with("https://cdn.example.com/a.png", None)

    async def test_delete_media_forces_by_default(self, registry, wp):
        wp.call_core_api.return_value = {}
        await registry.execute("wordpress_delete_media", {"media_id": 5})
        wp.call_core_api.assert_awaited_once_with("/media/5", "DELETE", params={"force": "true"})


class TestUserAndSiteTools:
    """Users and site groups."""

    async def test_create_user_defaults_to_subscriber(self, registry, wp):
        wp.call_core_api.return_value = {"id": 2, "username": "jo"}
        await registry.execute("wordpress_create_user", {"username": "jo", "email": "jo@example.com", "password": "pw"})
        body = wp.call_core_api.await_args.args[2]
        assert body["roles"] == ["subscriber"]
        assert "name" not in body

    async def test_delete_user_always_forces(self, registry, wp):
        wp.call_core_api.return_value = {}
        await registry.execute("wordpress_delete_user", {"user_id": 7, "reassign": 1})
        wp.call_core_api.assert_awaited_once_with("/users/7", "DELETE", params={"force": "true", "reassign": 1})

    async def test_site_info_lists_route_keys(self, registry, wp):
        wp.call_root_api.return_value = {
            "name": "Blog",
            "home": "https://blog.example.com",
            "namespaces": ["wp/v2"],
            "routes": {"/": {}, "/wp/v2/posts": {}},
        }
        result = await registry.execute("wordpress_get_site_info", {})
        assert result.data["routes"] == ["/", "/wp/v2/posts"]
        assert result.message == "Site: Blog"

    async def test_test_connection_failure_message(self, registry, wp):
        wp.call_core_api.side_effect = WordPressAPIError.from_response("WordPress", 401, "Unauthorized", "bad creds")
        result = await registry.execute("wordpress_test_connection", {})
        assert result.message == "Failed to test connection: WordPress API error: 401 Unauthorized - bad creds"

    async def test_update_settings_sends_the_mapping(self, registry, wp):
        wp.call_core_api.return_value = {"title": "New"}
        await registry.execute("wordpress_update_settings", {"settings": {"title": "New"}})
        wp.call_core_api.assert_awaited_once_with("/settings", "PUT", {"title": "New"})


class TestPluginTools:
    """Plugins group."""

    async def test_activate_resolves_slug(self, registry, wp):
        wp.call_core_api.side_effect = [
            [{"plugin": "akismet-extra/extra.php"}, {"plugin": "akismet/akismet.php"}],
            {"status": "active"},
        ]
        result = await registry.execute("wordpress_activate_plugin", {"slug": "akismet"})
        assert result.success
        assert result.data == {"plugin": "akismet/akismet.php", "status": "active"}
        assert wp.call_core_api.await_args_list[1] == call("/plugins/akismet%2Fakismet.php", "PUT", {"status": "active"})

    async def test_activate_unknown_slug(self, registry, wp):
        wp.call_core_api.return_value = [{"plugin": "hello.php"}]
        result = await registry.execute("wordpress_activate_plugin", {"slug": "akismet"})
        assert not result.success
        assert "plugin_file" in result.message
        assert wp.call_core_api.await_count == 1

    async def test_deactivate_with_plugin_file(self, registry, wp):
        wp.call_core_api.return_value = {"status": "inactive"}
        result = await registry.execute("wordpress_deactivate_plugin", {"plugin_file": "akismet/akismet.php"})
        assert result.data["status"] == "inactive"
        wp.call_core_api.assert_awaited_once_with("/plugins/akismet%2Fakismet.php", "PUT", {"status": "inactive"})

    async def test_install_from_zip_and_activate(self, registry, wp):
        wp.call_core_api.return_value = {"plugin": "x/x.php", "status": "active"}
        result = await registry.execute("wordpress_install_plugin", {"zip_url": "https://example.com/x.zip", "activate": True})
        assert result.success
        assert "activated" in result.message
        wp.call_core_api.assert_awaited_once_with("/plugins", "POST", {
            "source_url": "https://example.com/x.zip",
            "zip_url": "https://example.com/x.zip",
            "status": "active",
        })

    async def test_install_needs_slug_or_zip(self, registry, wp):
        result = await registry.execute("wordpress_install_plugin", {})
        assert result.to_dict() == {"success": False, "error": "Provide either slug or zip_url"}

    async def test_search_plugins(self, registry, wp):
        wp.search_plugin_directory.return_value = [{"slug": "a", "name": "A", "description": ""}]
        result = await registry.execute("wordpress_search_plugins", {"query": "seo", "per_page": 5})
        assert result.data["count"] == 1
        wp.search_plugin_directory.assert_awaited_once_with("seo", 1, 5)


class TestSeoTools:
    """SEO meta writes and the Yoast indexable flag."""

    async def test_post_meta_and_indexable(self, registry, wp):
        wp.call_core_api.return_value = {}
        wp.call_companion_api.return_value = {"updated": True}
        result = await registry.execute("wordpress_set_seo_meta", {
            "post_id": 10,
            "meta_description": "Best guide",
            "focus_keyword": "guide",
        })

        assert result.success
        assert result.data["yoast_indexable_updated"] is True
        assert result.data["yoast_indexable_error"] is None
        assert result.message.endswith("(+ Yoast indexable)")
        wp.call_core_api.assert_awaited_once_with("/posts/10", "PUT", {"meta": {
            "_yoast_wpseo_metadesc": "Best guide",
            "_yoast_wpseo_focuskw": "guide",
        }})
        wp.call_companion_api.assert_awaited_once_with("/yoast-indexable", "POST", {
            "object_id": 10,
            "object_type": "post",
            "description": "Best guide",
            "primary_focus_keyword": "guide",
        })

    async def test_indexable_failure_is_flagged_not_fatal(self, registry, wp):
        wp.call_core_api.return_value = {}
        wp.call_companion_api.side_effect = not_found("rest_no_route")
        result = await registry.execute("wordpress_set_seo_meta", {"post_id": 10, "og_title": "OG"})

        assert result.success
        assert result.data["yoast_indexable_updated"] is False
        assert "404" in result.data["yoast_indexable_error"]
        assert result.data["meta_fields_set"] == ["_yoast_wpseo_opengraph-title"]
        assert "not updated" in result.message

    async def test_product_uses_commerce_meta_data(self, registry, wp):
        wp.call_commerce_api.return_value = {}
        wp.call_companion_api.return_value = {}
        result = await registry.execute("wordpress_set_seo_meta", {"product_id": 77, "canonical_url": "https://shop.example.com/p"})

        assert result.data["product_id"] == 77
        wp.call_core_api.assert_not_called()
        wp.call_commerce_api.assert_awaited_once_with("/products/77", "PUT", {
            "meta_data": [{"key": "_yoast_wpseo_canonical", "value": "https://shop.example.com/p"}],
        })
        indexable = wp.call_companion_api.await_args.args[2]
        assert indexable["object_type"] == "product"
        assert indexable["canonical"] == "https://shop.example.com/p"

    async def test_needs_a_target(self, registry, wp):
        result = await registry.execute("wordpress_set_seo_meta", {"meta_description": "x"})
        assert not result.success
        wp.call_core_api.assert_not_called()

    async def test_get_seo_meta_from_post(self, registry, wp):
        wp.call_core_api.return_value = {"id": 10, "meta": {"_yoast_wpseo_focuskw": "guide"}}
        result = await registry.execute("wordpress_get_seo_meta", {"post_id": 10})
        assert result.data["seo"]["focus_keyword"] == "guide"
        assert result.data["seo"]["meta_description"] == ""


class TestCommerceTools:
    """WooCommerce products."""

    async def test_create_product_stringifies_prices(self, registry, wp):
        wp.call_commerce_api.return_value = {"id": 1, "name": "Mug"}
        await registry.execute("woocommerce_create_product", {"name": "Mug", "regular_price": 19.99, "sale_price": 15})
        endpoint, method, body = wp.call_commerce_api.await_args.args
        assert (endpoint, method) == ("/products", "POST")
        assert body == {"name": "Mug", "type": "simple", "regular_price": "19.99", "sale_price": "15"}

    async def test_update_product_stringifies_prices(self, registry, wp):
        wp.call_commerce_api.return_value = {"id": 1}
        await registry.execute("woocommerce_update_product", {"id": 1, "updates": {"regular_price": 20}})
        wp.call_commerce_api.assert_awaited_once_with("/products/1", "PUT", {"regular_price": "20"})

    async def test_get_products_defaults(self, registry, wp):
        wp.call_commerce_api.return_value = []
        await registry.execute("woocommerce_get_products", {})
        wp.call_commerce_api.assert_awaited_once_with("/products", params={"per_page": 20, "page": 1, "search": ""})

    async def test_delete_product_forces_by_default(self, registry, wp):
        wp.call_commerce_api.return_value = {"id": 1}
        await registry.execute("woocommerce_delete_product", {"id": 1})
        wp.call_commerce_api.assert_awaited_once_with("/products/1", "DELETE", params={"force": "true"})


class TestCustomTypeTools:
    """Custom post types."""

    async def test_get_cpt_passes_query(self, registry, wp):
        wp.call_core_api.return_value = [{"id": 1}]
        result = await registry.execute("wordpress_get_cpt", {"post_type": "/portfolio/", "params": {"per_page": 5}})
        assert result.data["count"] == 1
        wp.call_core_api.assert_awaited_once_with("/portfolio", params={"per_page": 5})

    async def test_blank_post_type_is_rejected(self, registry, wp):
        result = await registry.execute("wordpress_delete_cpt", {"post_type": " ", "id": 1})
        assert not result.success
        wp.call_core_api.assert_not_called()


class TestCompanionTools:
    """Companion plugin file and maintenance tools."""

    async def test_read_file_omits_missing_arguments(self, registry, wp):
        wp.call_companion_api.return_value = {"path": "wp-config.php", "contents": "<?php", "total_lines": 1}
        result = await registry.execute("banildtools_read_file", {"target_file": "wp-config.php"})
        assert result.data["contents"] == "<?php"
        wp.call_companion_api.assert_awaited_once_with("/read", body={"target_file": "wp-config.php"})

    async def test_edit_file_defaults(self, registry, wp):
        wp.call_companion_api.return_value = {"path": "a.php", "replacements": 1}
        result = await registry.execute("banildtools_edit_file", {"file_path": "a.php", "old_string": "a", "new_string": "b"})
        assert result.message == "Replaced 1 occurrence(s) in a.php"
        assert wp.call_companion_api.await_args.kwargs["body"]["replace_all"] is False

    async def test_server_info_is_a_get(self, registry, wp):
        wp.call_companion_api.return_value = {"php": {"version": "8.2"}, "wordpress": {"version": "6.6"}}
        result = await registry.execute("banildtools_server_info", {})
        assert result.message == "Server: PHP 8.2, WP 6.6"
        wp.call_companion_api.assert_awaited_once_with("/server-info", "GET")

    async def test_debug_log_clear(self, registry, wp):
        wp.call_companion_api.return_value = {"cleared": True}
        result = await registry.execute("banildtools_debug_log", {"action": "clear"})
        assert result.data == {"cleared": True}

    async def test_php_lint_needs_input(self, registry, wp):
        result = await registry.execute("banildtools_php_lint", {})
        assert not result.success
        wp.call_companion_api.assert_not_called()

    async def test_set_option_accepts_any_value(self, registry, wp):
        wp.call_companion_api.return_value = {"name": "blogname", "updated": True}
        result = await registry.execute("banildtools_set_option", {"name": "blogname", "value": {"a": [1]}})
        assert result.message == 'Option "blogname" updated'
        wp.call_companion_api.assert_awaited_once_with("/option/set", body={"name": "blogname", "value": {"a": [1]}})
