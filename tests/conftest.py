"""Shared fixtures: test settings, a recording mock transport and a mocked client."""

from unittest.mock import AsyncMock

import httpx
import pytest

from config.settings import Settings
from core.tools.registry import COMPANION_GROUP, CORE_GROUPS, ToolRegistry
from integrations.wordpress import WordPressClient


def make_settings(**overrides) -> Settings:
    values = {
        "wordpress_url": "https://blog.example.com/",
        "wordpress_username": "admin",
        "wordpress_password": "abcd efgh ijkl",
        "wc_consumer_key": "",
        "wc_consumer_secret": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class Recorder:
    """MockTransport handler that keeps every request it answers."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings():
    """Site settings without WooCommerce keys."""
    return make_settings()


@pytest.fixture
def make_client(settings):
    """Build a WordPressClient whose HTTP traffic goes to ``handler``."""
    def _make(handler, config: Settings | None = None):
        recorder = Recorder(handler)
        client = WordPressClient(config or settings, transport=httpx.MockTransport(recorder))
        return client, recorder
    return _make


@pytest.fixture
def wp():
    """WordPressClient stand-in for tool tests."""
    return AsyncMock(spec=WordPressClient)


@pytest.fixture
def registry(wp):
    """Every tool group bound to the mocked client."""
    reg = ToolRegistry(wp)
    reg.include(*CORE_GROUPS, COMPANION_GROUP)
    return reg
