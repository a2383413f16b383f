"""
Object Store Interface - Abstract base for durable key/value object storage.

Keys are path-like strings namespaced by purpose (raw documents at the root,
parsed results under ``parsed/``). The store does not enforce immutability;
callers check ``exists`` before writing to keep content-addressed keys
write-once.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class StorageObject:
    """A stored object: key, payload, content type and custom metadata."""
    key: str
    data: bytes
    content_type: str
    metadata: Dict[str, str] = field(default_factory=dict)


class ObjectStore(ABC):
    """
    Abstract interface for object storage backends (GCS, in-memory).

    All backend and transport failures surface as ``StorageError``;
    a missing key on read surfaces as ``ObjectNotFoundError``.
    """

    #: Human-readable container name reported back to upload clients.
    bucket_name: str = ""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if the key exists. Never raises for a missing key."""
        pass

    @abstractmethod
    def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        """Write an object, overwriting any existing object at the key."""
        pass

    @abstractmethod
    def put_if_absent(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Atomically create an object. Returns False if the key already exists."""
        pass

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read an object's payload."""
        pass

    @abstractmethod
    def metadata(self, key: str) -> Dict[str, str]:
        """Read an object's custom metadata map."""
        pass

    @abstractmethod
    def list(self, prefix: str = "") -> List[str]:
        """List every key starting with ``prefix``, placeholders included."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete an object. Missing keys are ignored."""
        pass
