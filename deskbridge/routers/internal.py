"""
Internal router - health check and system info for the UI shell.
"""
import platform
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter
from pydantic import BaseModel, Field

router = APIRouter(tags=["internal"])

PACKAGE_NAME = "deskbridge"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(examples=["healthy"])


class SystemResponse(BaseModel):
    """Host platform and application version."""
    platform: str = Field(examples=["linux"], description="Lower-cased OS name")
    version: str = Field(examples=["0.1.0"], description="Installed application version")


def get_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        # Running from a source checkout
        return "0.0.0"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


@router.get("/system", response_model=SystemResponse)
async def system() -> SystemResponse:
    """Report the host platform and installed version."""
    return SystemResponse(platform=platform.system().lower(), version=get_version())
