# uonum/core/word_link.py
"""
WordLink - one node of the transition graph.

A WordLink is keyed by `<surface>_<primary class>` and holds the outgoing
edges seen after that word anywhere in the corpus:

    {"word": "犬", "features": ["名詞", "普通名詞", "一般"],
     "links": {"が_助詞": 2, "は_助詞": 1}}

Only the first feature takes part in the key, so tokens that differ only in
secondary features collapse onto the same node. The features stored are the
ones seen when the node was first created; later occurrences never replace
them.
"""

from __future__ import annotations

import json
import random
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from typing_extensions import TypedDict

from uonum.core.errors import RecordDecodeError, RecordEncodeError

KEY_SEPARATOR = "_"


class WordLinkDict(TypedDict):
    """Serialized shape of a WordLink."""
    word: str
    features: List[str]
    links: Dict[str, int]


def make_key(word: str, word_class: str) -> str:
    """Word identity key used both for storage and for lookups during a walk."""
    return f"{word}{KEY_SEPARATOR}{word_class}"


@dataclass
class WordLink:
    word: str
    features: List[str] = field(default_factory=list)
    links: Dict[str, int] = field(default_factory=dict)

    def key(self) -> str:
        if not self.features:
            raise ValueError(f"[{self.word}] word link has no features")
        return make_key(self.word, self.features[0])

    def add_link(self, dest: str, count: int = 1) -> None:
        self.links[dest] = self.links.get(dest, 0) + count

    def merge(self, other: Optional["WordLink"]) -> None:
        """Sum `other`'s edge counts into this node. Word and features are kept."""
        if other is None or not other.links:
            return
        for dest, count in other.links.items():
            self.add_link(dest, count)

    def candidates(self) -> List[str]:
        """Destinations that can be walked to, i.e. with a positive count."""
        return sorted(k for k, c in self.links.items() if c > 0)

    def next(self, rng: random.Random) -> str:
        """
        Pick a destination with probability proportional to its count.
        Zero-count links are left out of the pool entirely.
        Returns "" when there is nowhere to go.
        """
        keys = self.candidates()
        if not keys:
            return ""

        cumulative: List[int] = []
        total = 0
        for k in keys:
            total += self.links[k]
            cumulative.append(total)

        r = rng.randrange(total)
        return keys[bisect_right(cumulative, r)]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> WordLinkDict:
        return {"word": self.word, "features": list(self.features), "links": dict(self.links)}

    def encode(self) -> bytes:
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False, sort_keys=True).encode("utf-8")
        except (TypeError, ValueError) as e:
            key = self.key() if self.features else self.word
            raise RecordEncodeError(key, str(e)) from e

    @classmethod
    def decode(cls, key: str, data: bytes) -> "WordLink":
        """
        Parse stored bytes. Anything that is not a well formed record raises
        RecordDecodeError naming `key`; there are no silent defaults.
        """
        try:
            raw = json.loads(bytes(data).decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise RecordDecodeError(key, str(e)) from e

        if not isinstance(raw, dict):
            raise RecordDecodeError(key, "record is not an object")

        word = raw.get("word")
        features = raw.get("features")
        links = raw.get("links")

        if not isinstance(word, str):
            raise RecordDecodeError(key, "field 'word' missing or not a string")
        if (not isinstance(features, list) or not features
                or not all(isinstance(f, str) for f in features)):
            raise RecordDecodeError(key, "field 'features' must be a non-empty list of strings")
        if not isinstance(links, dict):
            raise RecordDecodeError(key, "field 'links' missing or not an object")
        for dest, count in links.items():
            # bool is an int subclass, reject it explicitly
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise RecordDecodeError(key, f"link {dest!r} has invalid count {count!r}")

        return cls(word=word, features=list(features), links=dict(links))
