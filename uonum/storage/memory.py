# uonum/storage/memory.py
# dict backed store with the same transaction contract as LmdbStore.
# used as the test double for the generator and for throwaway sessions.

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from uonum.core.errors import StoreIOError, StoreNotOpenError
from uonum.storage.base import BUCKETS


class MemoryTransaction:
    def __init__(self, buckets: Dict[str, Dict[bytes, bytes]], sequences: Dict[str, int],
                 writable: bool):
        self._buckets = buckets
        self._sequences = sequences
        self._writable = writable

    def _bucket(self, bucket: str) -> Dict[bytes, bytes]:
        try:
            return self._buckets[bucket]
        except KeyError:
            raise StoreIOError(f"Unknown bucket [{bucket}].") from None

    def _check_writable(self):
        if not self._writable:
            raise StoreIOError("Transaction is read-only.")

    def get(self, bucket: str, key: bytes) -> Optional[bytes]:
        return self._bucket(bucket).get(bytes(key))

    def put(self, bucket: str, key: bytes, value: bytes) -> None:
        self._check_writable()
        self._bucket(bucket)[bytes(key)] = bytes(value)

    def next_sequence(self, bucket: str) -> int:
        self._check_writable()
        self._bucket(bucket)
        self._sequences[bucket] = self._sequences.get(bucket, 0) + 1
        return self._sequences[bucket]

    def items(self, bucket: str) -> Iterator[Tuple[bytes, bytes]]:
        data = self._bucket(bucket)
        for k in sorted(data):
            yield k, data[k]


class MemoryStore:
    """
    Buckets live in plain dicts. A write transaction works on copies that are
    swapped in only when the block finishes without raising, so a failed
    register leaves nothing behind. Reopening keeps the data (it mimics a file
    that outlives the handle) until the object itself goes away.
    """

    def __init__(self):
        self.path: Optional[str] = None
        self._open = False
        self._buckets: Dict[str, Dict[bytes, bytes]] = {b: {} for b in BUCKETS}
        self._sequences: Dict[str, int] = {}

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, path: str = ":memory:") -> None:
        self.path = path
        self._open = True

    def close(self) -> None:
        if not self._open:
            raise StoreNotOpenError()
        self._open = False

    def _require_open(self):
        if not self._open:
            raise StoreNotOpenError()

    def _snapshot(self):
        return {b: dict(d) for b, d in self._buckets.items()}, dict(self._sequences)

    @contextmanager
    def read_write(self):
        self._require_open()
        buckets, sequences = self._snapshot()
        yield MemoryTransaction(buckets, sequences, writable=True)
        self._buckets, self._sequences = buckets, sequences

    @contextmanager
    def read_only(self):
        self._require_open()
        buckets, sequences = self._snapshot()
        yield MemoryTransaction(buckets, sequences, writable=False)
