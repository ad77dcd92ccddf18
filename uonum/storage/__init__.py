# uonum/storage/__init__.py
# store backends: LMDB on disk, dicts in memory

from .base import BUCKET_TEXTS, BUCKET_WORDS, BUCKETS, btoi, itob
from .lmdb_store import LmdbStore
from .memory import MemoryStore

__all__ = [
    "BUCKET_TEXTS",
    "BUCKET_WORDS",
    "BUCKETS",
    "LmdbStore",
    "MemoryStore",
    "btoi",
    "itob",
]
