"""
Base URL store - the one piece of configuration every proxied call reads.
"""
from __future__ import annotations

import threading

from deskbridge.services.errors import LockFailure


DEFAULT_API_URL = "http://localhost:8080"


class BaseUrlStore:
    """
    Thread-safe holder for the upstream base URL.

    Settings routes run in the worker threadpool while proxy routes run on
    the event loop, so the guard is a threading.Lock. It is held only for the
    assignment or the read, never across I/O. Writers are last-write-wins.
    """

    def __init__(self, initial: str = DEFAULT_API_URL, lock_timeout: float = 5.0):
        self._url = initial
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout

    def _acquire(self, operation: str) -> None:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockFailure(operation)

    def get(self) -> str:
        """Return the current base URL."""
        self._acquire("read")
        try:
            return self._url
        finally:
            self._lock.release()

    def set(self, new_url: str) -> None:
        """Replace the base URL; visible to every later get()."""
        self._acquire("write")
        try:
            self._url = new_url
        finally:
            self._lock.release()
