import base64
import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # WordPress site
    wordpress_url: str = ""
    wordpress_username: str = ""
    wordpress_password: str = ""  # Application Password recommended

    # WooCommerce REST keys (optional, Basic auth is used when absent)
    wc_consumer_key: str = ""
    wc_consumer_secret: str = ""

    # Companion plugin (file operations, options, server tools)
    companion_namespace: str = "banildtools"
    companion_name: str = "BanildTools"

    # Public plugin directory
    plugin_directory_url: str = "https://wordpress.org/plugins/wp-json/wp/v2"
    plugin_info_url: str = "https://api.wordpress.org/plugins/info/1.2/"

    # HTTP
    http_timeout: float = 60.0  # seconds, 0 disables

    # Logging
    log_level: str = "INFO"

    @field_validator("wordpress_url", "plugin_directory_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def auth_token(self) -> str:
        """Basic auth token for the configured user (base64 of user:password)."""
        credentials = f"{self.wordpress_username}:{self.wordpress_password}"
        return base64.b64encode(credentials.encode()).decode()

    @property
    def has_commerce_keys(self) -> bool:
        return bool(self.wc_consumer_key and self.wc_consumer_secret)

    @property
    def api_root(self) -> str:
        return f"{self.wordpress_url}/wp-json"

    def ensure_valid(self) -> None:
        """Exit the process if the site URL or credentials are missing. Run once at startup."""
        if not self.wordpress_url:
            logger.error("WORDPRESS_URL environment variable is required")
            sys.exit(1)
        if not self.wordpress_username or not self.wordpress_password:
            logger.error("WORDPRESS_USERNAME and WORDPRESS_PASSWORD environment variables are required")
            sys.exit(1)
        logger.info("Configuration validated")

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}


settings = Settings()
