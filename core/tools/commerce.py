"""WooCommerce product tools."""

from core.tools.registry import ToolResult, success, tool
from integrations.wordpress import WordPressClient

# WooCommerce expects prices as strings
PRICE_FIELDS = ("regular_price", "sale_price")


def with_string_prices(product: dict) -> dict:
    product = dict(product)
    for key in PRICE_FIELDS:
        if product.get(key) is not None:
            product[key] = str(product[key])
    return product


@tool(
    name="woocommerce_get_products",
    description="List WooCommerce products.",
    action="get products",
    group="commerce",
    parameters={
        "per_page": "Results per page (default 20)",
        "page": "Page number (default 1)",
        "search": "Search term",
    },
)
async def get_products(wp: WordPressClient, per_page: int = 20, page: int = 1, search: str = "") -> ToolResult:
    products = await wp.call_commerce_api("/products", params={"per_page": per_page, "page": page, "search": search})
    return success({"products": products, "count": len(products)}, f"Retrieved {len(products)} products")


@tool(
    name="woocommerce_get_product",
    description="Get one WooCommerce product by ID.",
    action="get product",
    group="commerce",
    parameters={"id": "Product ID"},
)
async def get_product(wp: WordPressClient, id: int) -> ToolResult:
    product = await wp.call_commerce_api(f"/products/{id}")
    return success(product, f"Retrieved product: {product.get('name')}")


@tool(
    name="woocommerce_create_product",
    description="Create a WooCommerce product.",
    action="create product",
    group="commerce",
    parameters={
        "name": "Product name",
        "type": "simple, variable, grouped or external (default simple)",
        "regular_price": "Regular price",
        "sale_price": "Sale price",
        "description": "Product description (HTML)",
        "short_description": "Short description (HTML)",
        "categories": "List of {id} objects",
        "images": "List of {src} or {id} objects",
        "extra": "Any other product fields",
    },
)
async def create_product(
    wp: WordPressClient,
    name: str,
    type: str = "simple",
    regular_price: str | float | None = None,
    sale_price: str | float | None = None,
    description: str = "",
    short_description: str = "",
    categories: list | None = None,
    images: list | None = None,
    extra: dict | None = None,
) -> ToolResult:
    body = dict(extra or {})
    body.update({"name": name, "type": type})
    optional = {
        "regular_price": regular_price,
        "sale_price": sale_price,
        "description": description,
        "short_description": short_description,
        "categories": categories,
        "images": images,
    }
    body.update({k: v for k, v in optional.items() if v not in (None, "")})
    product = await wp.call_commerce_api("/products", "POST", with_string_prices(body))
    return success(product, f"Created product: {product.get('name')}")


@tool(
    name="woocommerce_update_product",
    description="Update a WooCommerce product.",
    action="update product",
    group="commerce",
    parameters={"id": "Product ID", "updates": "Fields to change"},
)
async def update_product(wp: WordPressClient, id: int, updates: dict) -> ToolResult:
    product = await wp.call_commerce_api(f"/products/{id}", "PUT", with_string_prices(updates))
    return success(product, f"Updated product {id}")


@tool(
    name="woocommerce_delete_product",
    description="Delete a WooCommerce product.",
    action="delete product",
    group="commerce",
    parameters={"id": "Product ID", "force": "Delete permanently (default true)"},
)
async def delete_product(wp: WordPressClient, id: int, force: bool = True) -> ToolResult:
    product = await wp.call_commerce_api(f"/products/{id}", "DELETE", params={"force": str(force).lower()})
    return success(product, f"Deleted product {id}")
