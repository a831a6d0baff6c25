"""I/O collaborators: remote collection clients and checkpoint storage."""

from .checkpoint import FileCheckpointStore, MemoryCheckpointStore
from .collection import ListPage, RemoteCollection
from .keys import decode_key

__all__ = [
    "FileCheckpointStore",
    "MemoryCheckpointStore",
    "ListPage",
    "RemoteCollection",
    "decode_key",
]
