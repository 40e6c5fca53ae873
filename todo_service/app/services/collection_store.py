import asyncio
from abc import ABC, abstractmethod
from typing import Dict, List


class StorageError(Exception):
    """Raised when a collection cannot be persisted"""


class CollectionStore(ABC):
    """
    Named collections of JSON-compatible records - application layer.

    Each collection is read and written as a whole. Callers performing a
    read-modify-write cycle must hold ``lock(name)`` for the whole cycle;
    repositories do this for every operation.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, name: str) -> asyncio.Lock:
        """Per-collection lock serializing access to one collection"""
        lock = self._locks.get(name)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[name] = lock
        return lock

    @abstractmethod
    async def read(self, name: str) -> List[dict]:
        """Load every record of a collection (empty list if none)"""
        pass

    @abstractmethod
    async def write(self, name: str, records: List[dict]) -> None:
        """Replace a collection with the given records"""
        pass
