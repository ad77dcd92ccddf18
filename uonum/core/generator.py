# uonum/core/generator.py
"""
MarkovGenerator - learns word-to-word transitions from sentences and walks
them back out as text.

 - register(text): tokenize, count bigrams of (surface, class) nodes, merge
   the counts into the "words" bucket and append the raw text to the
   "texts" bucket, all in one write transaction
 - generate(trigger, word_class): weighted random walk from the trigger node
   until a terminal word, a dead end or (optionally) max_steps
 - dump(sink): every node and its edges in key order, for eyeballing
 - texts(): the raw text log in registration order

Note on termination: a cycle of positive-weight edges that never reaches a
terminal word keeps the walk going forever. Pass max_steps when the corpus
is not trusted to end its sentences.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from uonum.context.tokenizer import SpacyTokenizer, clean_tokens
from uonum.core.errors import StoreNotOpenError
from uonum.core.protocols import StoreProtocol, TokenizerProtocol
from uonum.core.transitions import build_links
from uonum.core.word_link import WordLink, make_key
from uonum.storage.base import BUCKET_TEXTS, BUCKET_WORDS, btoi, itob
from uonum.storage.lmdb_store import LmdbStore
from uonum.utils.logger_utils import time_block

logger = logging.getLogger(__name__)

DEFAULT_TERM_WORDS: Tuple[str, ...] = ("。", ".")
DEFAULT_CLASS = "名詞"


class MarkovGenerator:
    def __init__(
        self,
        tokenizer: Optional[TokenizerProtocol] = None,
        store: Optional[StoreProtocol] = None,
        term_words: Iterable[str] = DEFAULT_TERM_WORDS,
        default_class: str = DEFAULT_CLASS,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Args:
            tokenizer: anything with tokenize(text); spaCy Japanese by default.
            store: bucket store; LMDB by default.
            term_words: surfaces that end a walk (exact match, any class).
            default_class: class used by generate() when none is given.
            rng: random source for edge selection. Built from `seed` if absent.
        """
        self.tokenizer = tokenizer or SpacyTokenizer()
        self.store = store if store is not None else LmdbStore()
        self.term_words = frozenset(term_words)
        self.default_class = default_class
        self.rng = rng or random.Random(seed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self, path: str) -> None:
        self.store.open(path)

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "MarkovGenerator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.store.is_open:
            self.close()

    def _require_open(self) -> None:
        if not self.store.is_open:
            raise StoreNotOpenError()

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def register(self, text: str) -> None:
        self._require_open()

        tokens = clean_tokens(self.tokenizer.tokenize(text))
        scratch = build_links(tokens)
        if not scratch:
            logger.debug("skipping text with %d usable token(s)", len(tokens))
            return

        with time_block("register", logger), self.store.read_write() as tx:
            seq = tx.next_sequence(BUCKET_TEXTS)
            tx.put(BUCKET_TEXTS, itob(seq), text.encode("utf-8"))
            self._merge(tx, scratch)

        logger.debug("registered text #%d (%d nodes)", seq, len(scratch))

    @staticmethod
    def _merge(tx, scratch: Dict[str, WordLink]) -> None:
        """
        Fold scratch counts into the stored nodes. A stored node keeps its own
        word and features; only counts are added. A stored node that does not
        decode aborts the transaction rather than being overwritten.
        """
        for key, wl in scratch.items():
            bkey = key.encode("utf-8")
            data = tx.get(BUCKET_WORDS, bkey)
            if data is None:
                merged = wl
            else:
                merged = WordLink.decode(key, data)
                merged.merge(wl)
            tx.put(BUCKET_WORDS, bkey, merged.encode())

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(
        self,
        trigger: str,
        word_class: Optional[str] = None,
        rng: Optional[random.Random] = None,
        max_steps: Optional[int] = None,
    ) -> str:
        """
        Walk the graph from (trigger, word_class) and return the surfaces
        joined with no separator. An unknown trigger gives "".
        """
        if not trigger:
            return ""
        self._require_open()

        rng = rng or self.rng
        key = make_key(trigger, word_class or self.default_class)
        out = []

        with self.store.read_only() as tx:
            while max_steps is None or len(out) < max_steps:
                data = tx.get(BUCKET_WORDS, key.encode("utf-8"))
                if data is None:
                    break

                wl = WordLink.decode(key, data)
                out.append(wl.word)

                if wl.word in self.term_words:
                    break

                key = wl.next(rng)
                if not key:
                    break

        return "".join(out)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def dump(self, sink: TextIO) -> None:
        """
        Write every node in ascending key order:

            犬_名詞
              が_助詞 : 2

        A node that fails to decode stops the dump; lines already written stay.
        """
        self._require_open()

        with self.store.read_only() as tx:
            for bkey, data in tx.items(BUCKET_WORDS):
                key = bkey.decode("utf-8", errors="replace")
                wl = WordLink.decode(key, data)
                sink.write(f"{key}\n")
                for dest in sorted(wl.links):
                    sink.write(f"  {dest} : {wl.links[dest]}\n")
                sink.write("\n")

    def texts(self) -> List[Tuple[int, str]]:
        """Registered texts as (sequence, text), oldest first."""
        self._require_open()

        with self.store.read_only() as tx:
            return [(btoi(k), bytes(v).decode("utf-8")) for k, v in tx.items(BUCKET_TEXTS)]
