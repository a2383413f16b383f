"""
Object storage backends for raw and parsed resume artifacts.
"""
from storage.base import ObjectStore, StorageObject
from storage.memory import InMemoryObjectStore

__all__ = [
    'ObjectStore',
    'StorageObject',
    'InMemoryObjectStore',
]
