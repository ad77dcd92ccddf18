# uonum/context/tokenizer.py
# morphological tokenizer boundary + spaCy backed implementation

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "ja"
NO_FEATURE = "*"


@dataclass(frozen=True)
class Token:
    """
    One token from the tokenizer.
    features[0] is the primary part-of-speech class (e.g. 名詞), the rest are
    finer grained sub-classes. Boundary sentinels bracket every sequence.
    """
    surface: str
    features: List[str] = field(default_factory=list)
    is_boundary: bool = False


BOS = Token("", ["BOS"], is_boundary=True)
EOS = Token("", ["EOS"], is_boundary=True)


def clean_tokens(tokens: Sequence[Token]) -> List[Token]:
    """Drop boundary sentinels and single-space tokens."""
    out = []
    for t in tokens:
        if t.is_boundary:
            continue
        if t.surface == " ":
            continue
        out.append(t)
    return out


def token_features(tag: str, pos: str) -> List[str]:
    """
    Japanese pipelines tag with the UniDic hierarchy joined by '-'
    (名詞-普通名詞-一般); split it so the top level comes first.
    """
    if tag:
        feats = [f for f in tag.split("-") if f]
        if feats:
            return feats
    if pos:
        return [pos]
    return [NO_FEATURE]


class SpacyTokenizer:
    """
    Tokenizer on top of a spaCy pipeline. The pipeline is built on first use
    so that importing uonum does not pull spaCy's language data.

    `nlp` may be any callable returning spaCy-like tokens (text, tag_, pos_),
    which is how tests drive it without a model.
    """

    def __init__(self, model: str = DEFAULT_MODEL, nlp: Optional[Any] = None):
        self.model = model
        self._nlp = nlp

    @property
    def nlp(self):
        if self._nlp is None:
            self._nlp = self._load(self.model)
        return self._nlp

    @staticmethod
    def _load(model: str):
        import spacy

        # a bare language code gives a tokenizer-only pipeline, anything else
        # is treated as an installed package name (ja_core_news_sm, ...)
        if len(model) <= 3:
            logger.debug("building blank spaCy pipeline %r", model)
            return spacy.blank(model)
        logger.debug("loading spaCy model %r", model)
        return spacy.load(model)

    def tokenize(self, text: str) -> List[Token]:
        doc = self.nlp(text)
        tokens = [BOS]
        for t in doc:
            tokens.append(Token(t.text, token_features(t.tag_, t.pos_)))
        tokens.append(EOS)
        return tokens
