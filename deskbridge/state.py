"""
Application state - shared state initialized at startup.
"""
from __future__ import annotations

import httpx
from fastapi import HTTPException

from deskbridge.logging import get_logger
from deskbridge.services.base_url import BaseUrlStore
from deskbridge.services.proxy import ProxyService
from deskbridge.services.settings import SettingsStore

logger = get_logger(__name__)


class AppState:
    """
    Application state container.
    Initialized at startup via lifespan, injected into routes via FastAPI dependencies.
    """

    def __init__(self):
        self.base_url: BaseUrlStore | None = None
        self.settings_store: SettingsStore | None = None
        self.http_client: httpx.AsyncClient | None = None


app_state = AppState()


def get_base_url_store() -> BaseUrlStore:
    if app_state.base_url is None:
        logger.error("Base URL store not initialized")
        raise HTTPException(status_code=500, detail="Internal server error")
    return app_state.base_url


def get_settings_store() -> SettingsStore:
    if app_state.settings_store is None:
        logger.error("Settings store not initialized")
        raise HTTPException(status_code=500, detail="Internal server error")
    return app_state.settings_store


def get_proxy_service() -> ProxyService:
    """Build a proxy service over the shared base URL store and HTTP client."""
    if app_state.http_client is None:
        logger.error("HTTP client not initialized")
        raise HTTPException(status_code=500, detail="Internal server error")
    return ProxyService(get_base_url_store(), app_state.http_client)
