"""
In-memory object store used for local development and tests.
"""
import logging
from threading import Lock
from typing import Dict, List

from core.exceptions import ObjectNotFoundError
from storage.base import ObjectStore, StorageObject

logger = logging.getLogger(__name__)


class InMemoryObjectStore(ObjectStore):
    """Thread-safe dict-backed store with the same semantics as the GCS backend."""

    def __init__(self, bucket_name: str = "memory", cache_control: str = "no-cache"):
        self.bucket_name = bucket_name
        self.cache_control = cache_control
        self._objects: Dict[str, StorageObject] = {}
        self._lock = Lock()

    def _build(self, key, data, content_type, metadata) -> StorageObject:
        return StorageObject(
            key=key,
            data=bytes(data),
            content_type=content_type,
            metadata={"cacheControl": self.cache_control, **(metadata or {})},
        )

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._objects

    def put(self, key, data, content_type, metadata=None) -> None:
        obj = self._build(key, data, content_type, metadata)
        with self._lock:
            self._objects[key] = obj
        logger.debug(f"Stored {key} ({len(obj.data)} bytes)")

    def put_if_absent(self, key, data, content_type, metadata=None) -> bool:
        obj = self._build(key, data, content_type, metadata)
        with self._lock:
            if key in self._objects:
                return False
            self._objects[key] = obj
        return True

    def get(self, key: str) -> bytes:
        with self._lock:
            obj = self._objects.get(key)
        if obj is None:
            raise ObjectNotFoundError(key)
        return obj.data

    def get_object(self, key: str) -> StorageObject:
        with self._lock:
            obj = self._objects.get(key)
        if obj is None:
            raise ObjectNotFoundError(key)
        return obj

    def metadata(self, key: str) -> Dict[str, str]:
        return dict(self.get_object(key).metadata)

    def list(self, prefix: str = "") -> List[str]:
        with self._lock:
            return sorted(k for k in self._objects if k.startswith(prefix))

    def delete(self, key: str) -> None:
        with self._lock:
            self._objects.pop(key, None)
