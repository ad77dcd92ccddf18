# uonum/core/protocols.py
"""
Protocol interfaces for the pieces the generator is wired from.

The generator depends on these rather than on spaCy or LMDB directly so the
merge and walk logic can be exercised with a scripted tokenizer and the
in-memory store.
"""

from __future__ import annotations

import random
from typing import (
    ContextManager,
    Iterator,
    Optional,
    Protocol,
    Sequence,
    TextIO,
    Tuple,
    runtime_checkable,
)

from uonum.context.tokenizer import Token


@runtime_checkable
class TokenizerProtocol(Protocol):
    """Raw text -> ordered tokens, bracketed by boundary sentinels."""

    def tokenize(self, text: str) -> Sequence[Token]:
        ...


@runtime_checkable
class TransactionProtocol(Protocol):
    """Operations available inside one store transaction."""

    def get(self, bucket: str, key: bytes) -> Optional[bytes]:
        ...

    def put(self, bucket: str, key: bytes, value: bytes) -> None:
        ...

    def next_sequence(self, bucket: str) -> int:
        """Next value of the bucket's counter. Starts at 1, never reused."""
        ...

    def items(self, bucket: str) -> Iterator[Tuple[bytes, bytes]]:
        """(key, value) pairs in ascending byte order of the key."""
        ...


@runtime_checkable
class StoreProtocol(Protocol):
    """
    Bucketed key-value store. read_write() commits on normal exit and rolls
    back when the block raises; read_only() sees one consistent snapshot.
    """

    @property
    def is_open(self) -> bool:
        ...

    def open(self, path: str) -> None:
        ...

    def close(self) -> None:
        ...

    def read_write(self) -> ContextManager[TransactionProtocol]:
        ...

    def read_only(self) -> ContextManager[TransactionProtocol]:
        ...


@runtime_checkable
class GeneratorProtocol(Protocol):
    """Public contract of a text generator."""

    def open(self, path: str) -> None:
        ...

    def close(self) -> None:
        ...

    def register(self, text: str) -> None:
        ...

    def generate(self, trigger: str, word_class: Optional[str] = None,
                 rng: Optional[random.Random] = None,
                 max_steps: Optional[int] = None) -> str:
        ...

    def dump(self, sink: TextIO) -> None:
        ...
