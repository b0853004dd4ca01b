"""
Pytest configuration and shared fixtures.
"""

import hashlib
import threading
from typing import Dict, List, Optional

import pytest

from bucketsync.models import ListPage, RemoteObject, SyncConfig
from bucketsync.services.retry import RetryPolicy
from bucketsync.services.storage.base import StorageTransport


class FakeStorage(StorageTransport):
    """In-memory bucket recording every call made to it."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None, page_size: int = 1000):
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.headers: Dict[str, Dict[str, str]] = {}
        self.page_size = page_size
        self.calls: List[tuple] = []
        self.fail_keys: Dict[str, int] = {}
        self._lock = threading.Lock()

    def _maybe_fail(self, key):
        with self._lock:
            remaining = self.fail_keys.get(key, 0)
            if remaining:
                self.fail_keys[key] = remaining - 1
                raise ConnectionError(f"simulated failure for {key}")

    def list_objects(self, prefix, continuation_token=None, max_keys=1000):
        with self._lock:
            self.calls.append(("list", prefix, continuation_token))
            keys = sorted(k for k in self.objects if k.startswith(prefix))
        start = int(continuation_token or 0)
        size = min(max_keys, self.page_size)
        chunk = keys[start:start + size]
        objects = [
            RemoteObject(k, '"%s"' % hashlib.md5(self.objects[k]).hexdigest().upper())
            for k in chunk
        ]
        next_token = str(start + size) if start + size < len(keys) else None
        return ListPage(objects, next_token)

    def put_object(self, key, local_path, headers):
        self._maybe_fail(key)
        with open(local_path, "rb") as f:
            data = f.read()
        with self._lock:
            self.calls.append(("put", key))
            self.objects[key] = data
            self.headers[key] = dict(headers)

    def delete_object(self, key):
        self._maybe_fail(key)
        with self._lock:
            self.calls.append(("delete", key))
            self.objects.pop(key, None)

    def calls_of(self, kind):
        return [call[1] for call in self.calls if call[0] == kind]


async def _no_sleep(_delay):
    return None


@pytest.fixture
def fake_storage() -> FakeStorage:
    """Empty in-memory bucket."""
    return FakeStorage()


@pytest.fixture
def fast_retry() -> RetryPolicy:
    """Retry policy with three attempts and no waiting."""
    return RetryPolicy(3, sleep=_no_sleep)


@pytest.fixture
def site_dir(tmp_path):
    """Create a small static-site tree."""
    root = tmp_path / "site"
    files = {
        "index.html": b"<html>home</html>",
        "about/index.html": b"<html>about</html>",
        "assets/app.js": b"console.log(1);",
        "assets/style.css": b"body {}",
        "tmp/draft.txt": b"draft",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def make_config(site_dir):
    """Factory for SyncConfig objects pointing at ``site_dir``."""
    def _make(**overrides):
        values = dict(
            access_key_id="AKIDEXAMPLE",
            access_key_secret="secret-example",
            bucket="test-bucket",
            endpoint="oss-cn-hangzhou.aliyuncs.com",
            local_path=str(site_dir),
        )
        values.update(overrides)
        return SyncConfig(**values)
    return _make


@pytest.fixture
def make_storage():
    """Factory for pre-populated in-memory buckets."""
    return FakeStorage
