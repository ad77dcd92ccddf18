# uonum/storage/lmdb_store.py
"""
LmdbStore - persistent bucket store on top of LMDB.

Layout of the environment (a single file, `subdir=False`):
 - one named sub-database per bucket ("words", "texts")
 - an internal "sequences" sub-database holding one 8-byte counter per
   bucket, bumped inside the caller's write transaction, so a sequence
   number is only consumed when that transaction commits

LMDB gives one writer at a time and MVCC snapshots for readers, which is
exactly the transaction contract the generator needs.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

import lmdb

from uonum.core.errors import StoreIOError, StoreNotOpenError
from uonum.storage.base import BUCKETS, btoi, itob

logger = logging.getLogger(__name__)

SEQUENCES_DB = b"sequences"
DEFAULT_MAP_SIZE = 1 << 30  # 1 GiB address space, file grows as needed


class LmdbTransaction:
    """Thin wrapper over an lmdb.Transaction that speaks bucket names."""

    def __init__(self, txn: "lmdb.Transaction", dbs: Dict[str, "lmdb._Database"], seq_db):
        self._txn = txn
        self._dbs = dbs
        self._seq_db = seq_db

    def _db(self, bucket: str):
        try:
            return self._dbs[bucket]
        except KeyError:
            raise StoreIOError(f"Unknown bucket [{bucket}].") from None

    def get(self, bucket: str, key: bytes) -> Optional[bytes]:
        try:
            return self._txn.get(key, db=self._db(bucket))
        except lmdb.Error as e:
            raise StoreIOError(f"Could not read [{bucket}] {key!r}.") from e

    def put(self, bucket: str, key: bytes, value: bytes) -> None:
        try:
            self._txn.put(key, value, db=self._db(bucket))
        except lmdb.Error as e:
            raise StoreIOError(f"Could not put [{bucket}] {key!r}.") from e

    def next_sequence(self, bucket: str) -> int:
        self._db(bucket)
        name = bucket.encode("utf-8")
        try:
            raw = self._txn.get(name, db=self._seq_db)
            seq = (btoi(raw) if raw is not None else 0) + 1
            self._txn.put(name, itob(seq), db=self._seq_db)
        except lmdb.Error as e:
            raise StoreIOError(f"Could not get next sequence for [{bucket}].") from e
        return seq

    def items(self, bucket: str) -> Iterator[Tuple[bytes, bytes]]:
        db = self._db(bucket)
        try:
            cur = self._txn.cursor(db=db)
        except lmdb.Error as e:
            raise StoreIOError(f"Could not iterate [{bucket}].") from e
        try:
            for k, v in cur:
                yield bytes(k), bytes(v)
        except lmdb.Error as e:
            raise StoreIOError(f"Could not iterate [{bucket}].") from e
        finally:
            cur.close()


class LmdbStore:
    def __init__(self, map_size: int = DEFAULT_MAP_SIZE):
        self.map_size = map_size
        self.path: Optional[str] = None
        self._env: Optional["lmdb.Environment"] = None
        self._dbs: Dict[str, "lmdb._Database"] = {}
        self._seq_db = None

    @property
    def is_open(self) -> bool:
        return self._env is not None

    def open(self, path: str) -> None:
        try:
            env = lmdb.open(
                path,
                subdir=False,
                map_size=self.map_size,
                max_dbs=len(BUCKETS) + 1,
                mode=0o600,
            )
        except lmdb.Error as e:
            raise StoreIOError(f"Could not open database [{path}].") from e

        try:
            with env.begin(write=True) as txn:
                dbs = {b: env.open_db(b.encode("utf-8"), txn=txn) for b in BUCKETS}
                seq_db = env.open_db(SEQUENCES_DB, txn=txn)
        except lmdb.Error as e:
            env.close()
            raise StoreIOError("Failed to create the buckets.") from e

        self._env = env
        self._dbs = dbs
        self._seq_db = seq_db
        self.path = path
        logger.debug("opened lmdb store %s", path)

    def close(self) -> None:
        if self._env is None:
            raise StoreNotOpenError()
        env, self._env = self._env, None
        self._dbs = {}
        self._seq_db = None
        try:
            env.close()
        except lmdb.Error as e:
            raise StoreIOError("Failed to close the database.") from e
        logger.debug("closed lmdb store %s", self.path)

    def _require_env(self) -> "lmdb.Environment":
        if self._env is None:
            raise StoreNotOpenError()
        return self._env

    @contextmanager
    def _begin(self, write: bool):
        env = self._require_env()
        try:
            txn = env.begin(write=write)
        except lmdb.Error as e:
            raise StoreIOError("Could not begin transaction.") from e

        try:
            yield LmdbTransaction(txn, self._dbs, self._seq_db)
        except BaseException:
            txn.abort()
            raise

        try:
            txn.commit()
        except lmdb.Error as e:
            raise StoreIOError("Could not commit transaction.") from e

    def read_write(self):
        return self._begin(write=True)

    def read_only(self):
        return self._begin(write=False)
