"""
Shared test fixtures and helpers.
"""
from __future__ import annotations

from typing import Generator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from deskbridge.routers import api, internal, settings
from deskbridge.routers.errors import install_error_handlers
from deskbridge.services.base_url import BaseUrlStore
from deskbridge.services.proxy import ProxyService
from deskbridge.services.settings import SettingsStore
from deskbridge.state import AppState, app_state


TEST_BASE_URL = "http://api.test"


@pytest.fixture
def base_url_store() -> BaseUrlStore:
    """Base URL store pointing at the mocked upstream."""
    return BaseUrlStore(TEST_BASE_URL, lock_timeout=0.05)


@pytest.fixture
def http_client() -> httpx.AsyncClient:
    """Create an HTTP client for tests."""
    return httpx.AsyncClient(timeout=30.0, follow_redirects=True)


@pytest.fixture
def proxy_service(base_url_store, http_client) -> ProxyService:
    return ProxyService(base_url_store, http_client)


@pytest.fixture
def settings_store(tmp_path) -> SettingsStore:
    """Settings store backed by a file that does not exist yet."""
    return SettingsStore.in_directory(tmp_path / "app_data")


@pytest.fixture
def upload_file(tmp_path) -> str:
    """A small local file to upload."""
    path = tmp_path / "report.txt"
    path.write_bytes(b"node report\n")
    return str(path)


@pytest.fixture
def mock_app_state(base_url_store, settings_store, http_client) -> Generator[AppState, None, None]:
    """
    Set up app_state with test values and reset after test.
    """
    # Store original values
    original_base_url = app_state.base_url
    original_settings_store = app_state.settings_store
    original_client = app_state.http_client

    # Set test values
    app_state.base_url = base_url_store
    app_state.settings_store = settings_store
    app_state.http_client = http_client

    yield app_state

    # Restore original values
    app_state.base_url = original_base_url
    app_state.settings_store = original_settings_store
    app_state.http_client = original_client


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with every router and the error handlers."""
    test_app = FastAPI()
    test_app.include_router(api.router)
    test_app.include_router(settings.router)
    test_app.include_router(internal.router)
    install_error_handlers(test_app)
    return test_app


@pytest.fixture
def client(app, mock_app_state) -> TestClient:
    """Create a test client over the mocked app state."""
    return TestClient(app)
