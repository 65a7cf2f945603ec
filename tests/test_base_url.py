"""
Tests for the base URL store - reads, writes, concurrency and lock failure.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from deskbridge.services.base_url import DEFAULT_API_URL, BaseUrlStore
from deskbridge.services.errors import LockFailure


class TestBaseUrlStore:
    """Tests for BaseUrlStore."""

    def test_default_value(self):
        """A new store should hold the built-in default."""
        assert BaseUrlStore().get() == DEFAULT_API_URL == "http://localhost:8080"

    def test_set_then_get(self):
        """A write should be visible to the next read."""
        store = BaseUrlStore()
        store.set("http://api.test")

        assert store.get() == "http://api.test"

    def test_value_is_stored_verbatim(self):
        """No trimming or slash normalization should happen."""
        store = BaseUrlStore()
        store.set("http://api.test/v1/ ")

        assert store.get() == "http://api.test/v1/ "

    def test_last_write_wins(self):
        """Sequential writes should leave the last value."""
        store = BaseUrlStore()
        for port in range(8000, 8010):
            store.set(f"http://localhost:{port}")

        assert store.get() == "http://localhost:8009"

    def test_concurrent_writes_from_threads(self):
        """After N concurrent writes, a read returns one of the written values."""
        store = BaseUrlStore(lock_timeout=5.0)
        urls = [f"http://host-{i}.test:{9000 + i}" for i in range(50)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(store.set, urls))

        assert store.get() in urls

    def test_reads_during_writes_see_whole_values(self):
        """Readers racing writers should never observe anything but complete values."""
        store = BaseUrlStore("http://initial.test", lock_timeout=5.0)
        urls = [f"http://writer-{i}.test" for i in range(100)]
        allowed = set(urls) | {"http://initial.test"}

        with ThreadPoolExecutor(max_workers=8) as pool:
            writes = [pool.submit(store.set, url) for url in urls]
            reads = [pool.submit(store.get) for _ in range(100)]
            seen = {future.result() for future in reads}
            for future in writes:
                future.result()

        assert seen <= allowed

    async def test_concurrent_writes_from_tasks(self):
        """Writes issued from many tasks should also resolve to one written value."""
        store = BaseUrlStore(lock_timeout=5.0)
        urls = [f"http://task-{i}.test" for i in range(20)]

        await asyncio.gather(*(asyncio.to_thread(store.set, url) for url in urls))

        assert store.get() in urls

    def test_get_raises_lock_failure_when_guard_unavailable(self):
        """A read that cannot acquire the guard should fail with LockFailure."""
        store = BaseUrlStore(lock_timeout=0.01)
        store._lock.acquire()
        try:
            with pytest.raises(LockFailure, match="read"):
                store.get()
        finally:
            store._lock.release()

    def test_set_raises_lock_failure_and_keeps_value(self):
        """A failed write should leave the previous value in place."""
        store = BaseUrlStore("http://before.test", lock_timeout=0.01)
        store._lock.acquire()
        try:
            with pytest.raises(LockFailure, match="write"):
                store.set("http://after.test")
        finally:
            store._lock.release()

        assert store.get() == "http://before.test"

    def test_store_usable_after_lock_failure(self):
        """A lock failure should only fail the call that hit it."""
        store = BaseUrlStore(lock_timeout=0.01)
        store._lock.acquire()
        with pytest.raises(LockFailure):
            store.get()
        store._lock.release()

        store.set("http://recovered.test")
        assert store.get() == "http://recovered.test"
