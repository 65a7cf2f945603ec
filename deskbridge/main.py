"""
DeskBridge - desktop backend that proxies UI commands to a configurable API.

Entry point for the FastAPI application.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from deskbridge.config import get_config
from deskbridge.logging import get_logger
from deskbridge.routers import api, internal, settings
from deskbridge.routers.errors import install_error_handlers
from deskbridge.services.base_url import DEFAULT_API_URL, BaseUrlStore
from deskbridge.services.errors import SettingsError
from deskbridge.services.settings import SettingsStore, get_app_data_dir
from deskbridge.state import app_state

load_dotenv()

logger = get_logger(__name__)


def _init_settings() -> None:
    """Load persisted settings (writing defaults on first run) and apply the API URL."""
    config = get_config()
    app_state.base_url = BaseUrlStore(DEFAULT_API_URL, lock_timeout=config.deskbridge_lock_timeout)
    app_state.settings_store = SettingsStore.in_directory(get_app_data_dir(config.deskbridge_data_dir))

    try:
        loaded = app_state.settings_store.load()
    except SettingsError as e:
        # The UI sees the same error on its first GET /settings
        logger.error(f"{e}; using {DEFAULT_API_URL} until settings are saved")
        return

    app_state.base_url.set(loaded.api_url)
    logger.info(f"Settings loaded from {app_state.settings_store.path}, API URL {loaded.api_url}")


def _init_http_client() -> None:
    """Initialize shared HTTP client for upstream requests."""
    app_state.http_client = httpx.AsyncClient(
        timeout=get_config().deskbridge_request_timeout,
        follow_redirects=True
    )
    logger.info("HTTP client initialized")


async def _shutdown_http_client() -> None:
    """Close the shared HTTP client."""
    if app_state.http_client:
        await app_state.http_client.aclose()
        app_state.http_client = None
        logger.info("HTTP client closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    _init_settings()
    _init_http_client()

    yield

    await _shutdown_http_client()


app = FastAPI(
    title="DeskBridge",
    description="Desktop backend that proxies UI commands to a configurable API",
    lifespan=lifespan
)

app.include_router(api.router)
app.include_router(settings.router)
app.include_router(internal.router)
install_error_handlers(app)


def run() -> None:
    """Serve the command API on the loopback interface."""
    config = get_config()
    uvicorn.run(app, host=config.deskbridge_host, port=config.deskbridge_port, log_level="warning")


if __name__ == "__main__":
    run()
