"""WordPress REST API client.

One coroutine per backend surface:
- Core content API (wp/v2) and the root discovery document (/wp-json/)
- WooCommerce (wc/v3), consumer key/secret query auth with Basic auth fallback
- Companion plugin API (<namespace>/v1) and its unauthenticated discovery probe
- Public WordPress.org plugin directory search
- Media uploads as multipart/form-data
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from config.settings import Settings
from integrations.wordpress.errors import PluginDirectoryError, WordPressAPIError
from integrations.wordpress.formatters import clean_params, rendered
from integrations.wordpress.multipart import build_multipart_body, filename_from_url

logger = logging.getLogger(__name__)


@dataclass
class CompanionStatus:
    """Result of the companion plugin discovery probe."""
    available: bool
    message: str
    version: str | None = None
    tools_count: int | None = None


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class WordPressClient:
    """Authenticated access to a single WordPress site.

    Settings are injected once; every call opens its own short-lived
    httpx.AsyncClient. ``transport`` is only meant for tests
    (httpx.MockTransport).
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport

    # ============ Plumbing ============

    def _http(self) -> httpx.AsyncClient:
        # Redirects are followed; httpx drops Authorization when the origin changes
        timeout = self.settings.http_timeout or None
        return httpx.AsyncClient(timeout=timeout, transport=self._transport, follow_redirects=True)

    def _auth_headers(self) -> dict:
        return {"Authorization": f"Basic {self.settings.auth_token}"}

    @property
    def core_base(self) -> str:
        return f"{self.settings.api_root}/wp/v2"

    @property
    def commerce_base(self) -> str:
        return f"{self.settings.api_root}/wc/v3"

    @property
    def companion_base(self) -> str:
        return f"{self.settings.api_root}/{self.settings.companion_namespace}/v1"

    async def _request(
        self,
        surface: str,
        method: str,
        url: str,
        headers: dict | None = None,
        params: dict | None = None,
        body: Any = None,
        content: bytes | None = None,
    ) -> Any:
        """Send one request and return the parsed JSON body.

        Raises WordPressAPIError on transport failures, non-2xx answers and
        unparseable bodies. An empty 2xx body is returned as {}.
        """
        headers = dict(headers or {})
        kwargs: dict[str, Any] = {}
        if content is not None:
            kwargs["content"] = content
        elif body is not None:
            headers["Content-Type"] = "application/json"
            kwargs["json"] = body

        try:
            async with self._http() as http:
                response = await http.request(
                    method.upper(),
                    url,
                    headers=headers,
                    params=clean_params(params) or None,
                    **kwargs,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"{surface} request failed: {method.upper()} {url}: {_describe(e)}")
            raise WordPressAPIError(f"Failed to call {surface} API: {_describe(e)}", surface=surface) from e

        if not response.is_success:
            logger.error(f"{surface} API error: {response.status_code} - {response.text[:500]}")
            raise WordPressAPIError.from_response(
                surface, response.status_code, response.reason_phrase, response.text
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise WordPressAPIError(
                f"{surface} API returned invalid JSON: {e}",
                surface=surface,
                body=response.text[:500],
            ) from e

    # ============ REST surfaces ============

    async def call_core_api(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Call the core content API, e.g. call_core_api("/posts/42")."""
        return await self._request(
            "WordPress", method, f"{self.core_base}{endpoint}",
            headers=self._auth_headers(), params=params, body=body,
        )

    async def call_root_api(self) -> Any:
        """Fetch the site discovery document at /wp-json/."""
        return await self._request(
            "WordPress root", "GET", f"{self.settings.api_root}/", headers=self._auth_headers()
        )

    async def call_commerce_api(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Call WooCommerce. Consumer keys go in the query string when both are set."""
        params = dict(params or {})
        headers = {}
        if self.settings.has_commerce_keys:
            params["consumer_key"] = self.settings.wc_consumer_key
            params["consumer_secret"] = self.settings.wc_consumer_secret
        else:
            headers = self._auth_headers()
        return await self._request(
            "WooCommerce", method, f"{self.commerce_base}{endpoint}",
            headers=headers, params=params, body=body,
        )

    async def call_companion_api(
        self,
        endpoint: str,
        method: str = "POST",
        body: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Call the companion plugin. Most of its endpoints are actions, hence POST."""
        return await self._request(
            self.settings.companion_name, method, f"{self.companion_base}{endpoint}",
            headers=self._auth_headers(), params=params, body=body,
        )

    async def probe_companion(self) -> CompanionStatus:
        """Check whether the companion plugin is installed. Never raises.

        Uses the public /tools endpoint so discovery works without credentials.
        """
        name = self.settings.companion_name
        url = f"{self.companion_base}/tools"
        try:
            async with self._http() as http:
                response = await http.get(url, headers={"Content-Type": "application/json"})

            if response.is_success:
                data = response.json()
                version = data.get("version")
                tools_count = data.get("tools_count")
                return CompanionStatus(
                    available=True,
                    message=f"{name} v{version} detected ({tools_count} additional tools)",
                    version=str(version) if version is not None else None,
                    tools_count=tools_count,
                )

            if response.status_code == 404:
                return CompanionStatus(available=False, message=f"{name} plugin not installed or inactive")

            return CompanionStatus(
                available=False,
                message=f"{name} check failed: {response.status_code} {response.reason_phrase}",
            )
        except Exception as e:
            return CompanionStatus(available=False, message=f"{name} check failed: {_describe(e)}")

    # ============ Plugin directory ============

    def _directory_strategies(self, query: str, page: int, per_page: int) -> list[tuple[str, dict]]:
        """Candidate requests against WordPress.org, in the order they are tried."""
        base = self.settings.plugin_directory_url
        return [
            (f"{base}/plugin", {"search": query, "page": page, "per_page": per_page}),
            (f"{base}/search", {"search": query, "subtype": "plugin", "page": page, "per_page": per_page}),
            (
                self.settings.plugin_info_url,
                {
                    "action": "query_plugins",
                    "request[search]": query,
                    "request[page]": page,
                    "request[per_page]": per_page,
                },
            ),
        ]

    async def search_plugin_directory(self, query: str, page: int = 1, per_page: int = 10) -> list[dict]:
        """Search the public plugin directory, returning {slug, name, description} dicts.

        Strategies are tried in order and the first one that answers wins.
        PluginDirectoryError (carrying the last failure) is raised only when
        all of them fail.
        """
        failures = []
        for url, params in self._directory_strategies(query, page, per_page):
            try:
                data = await self._request("WordPress.org", "GET", url, params=params)
            except WordPressAPIError as e:
                logger.warning(f"Plugin directory lookup via {url} failed: {e}")
                failures.append(str(e))
                continue
            return normalize_directory_results(data)
        raise PluginDirectoryError(failures)

    # ============ Media ============

    async def upload_media_bytes(self, data: bytes, filename: str, content_type: str | None = None) -> dict:
        """Upload raw bytes to the media library."""
        body, boundary = build_multipart_body(data, filename, content_type)
        headers = self._auth_headers()
        headers["Content-Type"] = f"multipart/form-data; boundary={boundary}"
        logger.info(f"Uploading {filename} ({len(data)} bytes)")
        return await self._request(
            "WordPress media", "POST", f"{self.core_base}/media", headers=headers, content=body
        )

    async def upload_media_base64(self, file_base64: str, filename: str) -> dict:
        """Upload base64 data (a "data:...;base64," prefix is accepted)."""
        if file_base64.startswith("data:") and "," in file_base64:
            file_base64 = file_base64.split(",", 1)[1]
        try:
            data = base64.b64decode(file_base64)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 file data: {e}") from e
        return await self.upload_media_bytes(data, filename)

    async def upload_media_file(self, file_path: str, filename: str | None = None) -> dict:
        """Upload a file from the local filesystem."""
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")
        return await self.upload_media_bytes(path.read_bytes(), filename or path.name)

    async def upload_media_from_url(self, url: str, filename: str | None = None) -> dict:
        """Download a remote file and upload it, keeping the source content type when it sends one."""
        try:
            async with self._http() as http:
                source = await http.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise WordPressAPIError(f"Failed to fetch media from URL: {_describe(e)}", surface="Media source") from e

        if not source.is_success:
            raise WordPressAPIError(
                f"Failed to fetch media from URL: {source.status_code} {source.reason_phrase}",
                surface="Media source",
                status_code=source.status_code,
                reason=source.reason_phrase,
            )

        content_type = source.headers.get("content-type")
        return await self.upload_media_bytes(source.content, filename or filename_from_url(url), content_type)


def normalize_directory_results(data: Any) -> list[dict]:
    """Flatten any of the directory answer shapes into {slug, name, description}."""
    if isinstance(data, dict) and isinstance(data.get("plugins"), list):
        items = data["plugins"]
    elif isinstance(data, list):
        items = data
    else:
        return []
    return [_normalize_listing(item) for item in items if isinstance(item, dict)]


def _normalize_listing(item: dict) -> dict:
    slug = item.get("slug") or ""
    if not slug:
        link = item.get("url") or item.get("link") or ""
        if isinstance(link, str) and "/plugins/" in link:
            slug = link.split("/plugins/", 1)[1].strip("/").split("/")[0]

    name = rendered(item.get("name")) or rendered(item.get("title")) or slug
    description = (
        rendered(item.get("short_description"))
        or rendered(item.get("excerpt"))
        or rendered(item.get("description"))
    )
    return {"slug": slug, "name": name, "description": description}
