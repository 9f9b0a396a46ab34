"""Directory store implementations."""

from workforce_api.repositories.base import DirectoryStore
from workforce_api.repositories.firestore_store import FirestoreDirectoryStore
from workforce_api.repositories.memory_store import InMemoryDirectoryStore

__all__ = [
    "DirectoryStore",
    "FirestoreDirectoryStore",
    "InMemoryDirectoryStore",
]
