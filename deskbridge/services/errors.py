"""
Error taxonomy for proxied calls, configuration access and settings persistence.

Every error renders as a human-readable message via str(), which is what the
command routes hand back to the UI.
"""
from __future__ import annotations

from typing import Optional


# Substituted when an error response body cannot be read
UNKNOWN_ERROR = "Unknown error"


class BridgeError(Exception):
    """Base class for every failure surfaced to the UI."""


class TransportFailure(BridgeError):
    """
    The upstream call did not produce a usable response.

    Covers DNS/connect/TLS errors, timeouts, request bodies that cannot be
    serialized, and response bodies that cannot be decoded or parsed.
    """

    def __init__(self, verb: str, url: str, reason: str, timed_out: bool = False):
        self.verb = verb
        self.url = url
        self.reason = reason
        self.timed_out = timed_out
        super().__init__(f"{verb} {url} failed: {reason}")


class UpstreamFailure(BridgeError):
    """The upstream answered with a non-2xx status."""

    def __init__(self, verb: str, url: str, status: int, detail: Optional[str]):
        self.verb = verb
        self.url = url
        self.status = status
        self.detail = detail or UNKNOWN_ERROR
        super().__init__(f"{verb} {url} failed: API error ({status}): {self.detail}")


class FileReadFailure(BridgeError):
    """The local file for an upload is missing or unreadable."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read file {path}: {reason}")


class LockFailure(BridgeError):
    """The base URL guard could not be acquired."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Failed to lock api_url for {operation}")


class SettingsError(BridgeError):
    """The settings file could not be read, parsed or written."""
