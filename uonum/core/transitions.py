# uonum/core/transitions.py
# builds the per-call scratch transition map from one cleaned token sequence

from __future__ import annotations

from typing import Dict, Iterable, Optional

from uonum.context.tokenizer import Token
from uonum.core.word_link import WordLink


def build_links(tokens: Iterable[Token]) -> Dict[str, WordLink]:
    """
    Turn consecutive token pairs into edge counts.

    Every occurrence of a key shares one WordLink, so repeated words and
    self loops accumulate inside a single text. The first occurrence decides
    the stored features. Fewer than two tokens gives an empty map.
    """
    toks = list(tokens)
    if len(toks) < 2:
        return {}

    scratch: Dict[str, WordLink] = {}
    prev: Optional[WordLink] = None
    for t in toks:
        wl = WordLink(word=t.surface, features=list(t.features))
        key = wl.key()
        wl = scratch.setdefault(key, wl)

        if prev is not None:
            prev.add_link(key)
        prev = wl

    return scratch
