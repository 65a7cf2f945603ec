"""
API router - UI commands forwarded to the upstream API.

Each command takes the endpoint path (appended verbatim to the configured
base URL) and, for POST/PUT, a JSON body. Failures come back as
{"detail": "..."} via the error handlers in deskbridge.routers.errors.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from deskbridge.services.proxy import ProxyService
from deskbridge.state import get_proxy_service

router = APIRouter(prefix="/api", tags=["api"])

ERROR_RESPONSES = {
    400: {"description": "Upload file missing or unreadable"},
    502: {"description": "Upstream returned an error status, was unreachable, or sent a malformed body"},
    503: {"description": "Base URL could not be read"},
    504: {"description": "Upstream request timed out"},
}


class EndpointCommand(BaseModel):
    endpoint: str = Field(examples=["/api/v1/nodes"])


class BodyCommand(EndpointCommand):
    body: Any = Field(default_factory=dict)


class UploadCommand(EndpointCommand):
    file_path: str = Field(examples=["/home/user/backup.tar.gz"])


@router.post("/get", responses=ERROR_RESPONSES)
async def api_get(
    command: EndpointCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> JSONResponse:
    """Forward a GET request."""
    return JSONResponse(await proxy.get(command.endpoint))


@router.post("/post", responses=ERROR_RESPONSES)
async def api_post(
    command: BodyCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> JSONResponse:
    """Forward a POST request with a JSON body."""
    return JSONResponse(await proxy.post(command.endpoint, command.body))


@router.post("/put", responses=ERROR_RESPONSES)
async def api_put(
    command: BodyCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> JSONResponse:
    """Forward a PUT request with a JSON body."""
    return JSONResponse(await proxy.put(command.endpoint, command.body))


@router.post("/delete", responses=ERROR_RESPONSES)
async def api_delete(
    command: EndpointCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> JSONResponse:
    """Forward a DELETE request."""
    return JSONResponse(await proxy.delete(command.endpoint))


@router.post(
    "/download",
    response_class=Response,
    responses={
        200: {"description": "Raw upstream body", "content": {"application/octet-stream": {}}},
        **ERROR_RESPONSES,
    }
)
async def api_download(
    command: EndpointCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> Response:
    """Download raw bytes from the upstream; the body is passed through untouched."""
    content = await proxy.download(command.endpoint)
    return Response(content=content, media_type="application/octet-stream")


@router.post("/upload", responses=ERROR_RESPONSES)
async def api_upload(
    command: UploadCommand,
    proxy: ProxyService = Depends(get_proxy_service)
) -> JSONResponse:
    """Upload a local file as multipart field "file"."""
    return JSONResponse(await proxy.upload(command.endpoint, command.file_path))
