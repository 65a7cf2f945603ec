"""
Proxy service - forwards UI commands to the configured upstream API.
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import httpx

from deskbridge.logging import get_logger
from deskbridge.services.base_url import BaseUrlStore
from deskbridge.services.errors import (
    UNKNOWN_ERROR,
    FileReadFailure,
    TransportFailure,
    UpstreamFailure,
)

logger = get_logger(__name__)

SUPPORTED_VERBS = frozenset({"GET", "POST", "PUT", "DELETE"})

# Verbs that send a JSON body upstream
BODY_VERBS = frozenset({"POST", "PUT"})


def _decode_text(response: httpx.Response) -> str:
    """Decode the body with the declared charset, falling back to UTF-8."""
    return response.content.decode(response.charset_encoding or "utf-8")


def _reject_constant(token: str) -> Any:
    # NaN and +/-Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {token}")


def raise_for_upstream_status(response: httpx.Response, verb: str, url: str) -> None:
    """
    Raise UpstreamFailure for any non-2xx response.

    The error body is best-effort: if it cannot be decoded, a fixed
    placeholder is used so this path never fails on its own.
    """
    if response.is_success:
        return

    try:
        detail = _decode_text(response)
    except (UnicodeDecodeError, LookupError):
        detail = UNKNOWN_ERROR

    logger.warning(f"Upstream error for {verb} {url}: {response.status_code} {detail}")
    raise UpstreamFailure(verb, url, response.status_code, detail)


def classify_response(response: httpx.Response, verb: str, url: str) -> Any:
    """
    Turn an upstream response into a JSON value or a BridgeError.

    Order matters: status is checked before the body is parsed, and an empty
    body is a success before any parse is attempted.

    Returns:
        The decoded JSON value, or {} for an empty 2xx body

    Raises:
        UpstreamFailure: non-2xx status
        TransportFailure: body cannot be decoded as text or is not valid JSON
    """
    raise_for_upstream_status(response, verb, url)

    try:
        text = _decode_text(response)
    except (UnicodeDecodeError, LookupError) as e:
        logger.error(f"Undecodable response body from {verb} {url}: {e}")
        raise TransportFailure(verb, url, f"Failed to read response: {e}") from e

    if not text:
        return {}

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(f"Malformed JSON from {verb} {url}: {e}")
        raise TransportFailure(
            verb, url, f"Failed to parse response: {e} (body: {text!r})"
        ) from e


class ProxyService:
    """
    Forwards a bounded set of verbs to one configurable upstream.

    The base URL is read once per call, at the start, so a settings change
    affects only calls that begin after it.
    """

    def __init__(self, base_url: BaseUrlStore, client: httpx.AsyncClient):
        self._base_url = base_url
        self._client = client

    def build_url(self, endpoint: str) -> str:
        """Concatenate the current base URL and the endpoint as-is."""
        return f"{self._base_url.get()}{endpoint}"

    async def _send(self, verb: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one request on the shared client, mapping transport errors."""
        try:
            request = self._client.build_request(verb, url, **kwargs)
        except httpx.InvalidURL as e:
            logger.error(f"Invalid URL for {verb}: {url}")
            raise TransportFailure(verb, url, f"Invalid URL: {e}") from e
        except (TypeError, ValueError) as e:
            logger.error(f"Could not serialize body for {verb} {url}: {e}")
            raise TransportFailure(verb, url, f"Failed to serialize request body: {e}") from e

        logger.debug(f"{verb} {url}")
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {verb} {url}")
            raise TransportFailure(verb, url, f"Request timed out: {e}", timed_out=True) from e
        except httpx.RequestError as e:
            logger.error(f"Connection error calling {verb} {url}: {e}")
            raise TransportFailure(verb, url, f"Request failed: {e}") from e

        logger.debug(f"{verb} {url} -> {response.status_code} ({len(response.content)} bytes)")
        return response

    async def forward(self, verb: str, endpoint: str, body: Optional[Any] = None) -> Any:
        """
        Forward a JSON request to the upstream.

        Args:
            verb: One of GET, POST, PUT, DELETE
            endpoint: Path appended verbatim to the base URL
            body: JSON body for POST/PUT; ignored for GET/DELETE

        Returns:
            The decoded JSON response, {} for an empty body
        """
        verb = verb.upper()
        if verb not in SUPPORTED_VERBS:
            raise ValueError(f"Unsupported verb: {verb}")

        url = self.build_url(endpoint)
        kwargs = {"json": body} if verb in BODY_VERBS else {}
        response = await self._send(verb, url, **kwargs)
        return classify_response(response, verb, url)

    async def get(self, endpoint: str) -> Any:
        return await self.forward("GET", endpoint)

    async def post(self, endpoint: str, body: Any) -> Any:
        return await self.forward("POST", endpoint, body)

    async def put(self, endpoint: str, body: Any) -> Any:
        return await self.forward("PUT", endpoint, body)

    async def delete(self, endpoint: str) -> Any:
        return await self.forward("DELETE", endpoint)

    async def download(self, endpoint: str) -> bytes:
        """Fetch raw bytes; the body is never JSON-decoded."""
        url = self.build_url(endpoint)
        response = await self._send("GET", url)
        raise_for_upstream_status(response, "GET", url)
        return response.content

    async def upload(self, endpoint: str, file_path: str) -> Any:
        """
        POST a local file as a single multipart field named "file".

        The file is read fully before any network call; a missing or
        unreadable file raises FileReadFailure.
        """
        url = self.build_url(endpoint)
        path = Path(file_path)
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Cannot read upload file {file_path}: {e}")
            raise FileReadFailure(file_path, str(e)) from e

        logger.info(f"Uploading {path.name} ({len(content)} bytes) to {url}")
        response = await self._send("POST", url, files={"file": (path.name, content)})
        return classify_response(response, "POST", url)
