"""
Settings router - read, save and reset user settings.

Every successful load, save or reset is followed by updating the in-memory
base URL, so the next proxied call uses the persisted value. Disk is written
first; a failed write leaves the base URL untouched.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deskbridge.logging import get_logger
from deskbridge.services.base_url import BaseUrlStore
from deskbridge.services.settings import Settings, SettingsStore
from deskbridge.state import get_base_url_store, get_settings_store

logger = get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


class SaveResponse(BaseModel):
    status: str = Field(examples=["saved"])


@router.get("", response_model=Settings)
def get_settings(
    store: SettingsStore = Depends(get_settings_store),
    base_url: BaseUrlStore = Depends(get_base_url_store)
) -> Settings:
    """Load settings (writing defaults on first run) and apply the API URL."""
    settings = store.load()
    base_url.set(settings.api_url)
    return settings


@router.put("", response_model=SaveResponse)
def save_settings(
    settings: Settings,
    store: SettingsStore = Depends(get_settings_store),
    base_url: BaseUrlStore = Depends(get_base_url_store)
) -> SaveResponse:
    store.save(settings)
    base_url.set(settings.api_url)
    logger.info(f"API URL set to {settings.api_url}")
    return SaveResponse(status="saved")


@router.post("/reset", response_model=Settings)
def reset_settings(
    store: SettingsStore = Depends(get_settings_store),
    base_url: BaseUrlStore = Depends(get_base_url_store)
) -> Settings:
    """Restore and persist the defaults."""
    settings = store.reset()
    base_url.set(settings.api_url)
    logger.info("Settings reset to defaults")
    return settings
