"""WordPress integration - core REST API, WooCommerce, companion plugin and media uploads."""

from integrations.wordpress.client import (
    CompanionStatus,
    WordPressClient,
    normalize_directory_results,
)
from integrations.wordpress.errors import (
    PluginDirectoryError,
    WordPressAPIError,
    WordPressError,
)

__all__ = [
    "CompanionStatus",
    "WordPressClient",
    "normalize_directory_results",
    "PluginDirectoryError",
    "WordPressAPIError",
    "WordPressError",
]
