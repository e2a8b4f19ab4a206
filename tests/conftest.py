"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from collections import Counter  # noqa: E402
from typing import Any, Callable, Iterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from storefront.client.app import create_app  # noqa: E402
from storefront.client.app.localization import InMemoryPreferenceStore  # noqa: E402
from storefront.client.app.session import CatalogSession  # noqa: E402
from storefront.client.app.services import RemoteSource  # noqa: E402
from storefront.client.config.schema import ClientSettings  # noqa: E402

API_BASE = "https://api.example.test/api/v1"

Handler = Callable[[httpx.Request], Any]


class FakeApi:
    """Routes requests by path to canned responses and counts calls."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: Counter[str] = Counter()

    def path(self, request: httpx.Request) -> str:
        return request.url.path.removeprefix("/api/v1")

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = self.path(request)
        self.calls[path] += 1
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"error": "not_found"})
        if callable(route):
            result = route(request)
            if hasattr(result, "__await__"):
                result = await result
            return result
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)


@pytest.fixture()
def settings() -> ClientSettings:
    return ClientSettings(api_base_url=API_BASE, api_token="secret-token")


@pytest.fixture()
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture()
def source(settings: ClientSettings, fake_api: FakeApi) -> RemoteSource:
    return RemoteSource(settings, transport=httpx.MockTransport(fake_api))


@pytest.fixture()
def preferences() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture()
def session(
    settings: ClientSettings,
    source: RemoteSource,
    preferences: InMemoryPreferenceStore,
) -> CatalogSession:
    return CatalogSession(settings, source=source, preferences=preferences)


@pytest.fixture()
def app(session: CatalogSession) -> Iterator[Flask]:
    """Return a configured Flask application backed by the fake API."""

    application = create_app(session)
    application.config.update(TESTING=True)
    yield application
    application.extensions["storefront"].close()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
