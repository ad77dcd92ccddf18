# tests/conftest.py
# shared fixtures: a scripted tokenizer and a generator on the in-memory store

import io
import random

import pytest

from uonum.context.tokenizer import BOS, EOS, Token
from uonum.core.generator import MarkovGenerator
from uonum.storage.memory import MemoryStore

# surface -> features, enough to spell out the sample sentences
LEXICON = {
    "犬": ["名詞", "普通名詞", "一般"],
    "猫": ["名詞", "普通名詞", "一般"],
    "が": ["助詞", "格助詞"],
    "は": ["助詞", "係助詞"],
    "走る": ["動詞", "一般"],
    "鳴く": ["動詞", "一般"],
    "。": ["記号", "句点"],
    " ": ["空白"],
}


class FakeTokenizer:
    """
    Splits on '|' and tags each piece from LEXICON (unknown pieces become
    名詞). Output is bracketed with BOS/EOS like the real tokenizer.
    Texts can also be scripted directly via `script`.
    """

    def __init__(self, script=None):
        self.script = dict(script or {})
        self.calls = []

    def tokenize(self, text):
        self.calls.append(text)
        if text in self.script:
            body = [Token(s, list(f)) for s, f in self.script[text]]
        elif not text:
            body = []
        else:
            body = [Token(s, list(LEXICON.get(s, ["名詞"]))) for s in text.split("|")]
        return [BOS] + body + [EOS]


@pytest.fixture
def tokenizer():
    return FakeTokenizer()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def gen(tokenizer, store):
    g = MarkovGenerator(tokenizer=tokenizer, store=store, rng=random.Random(0))
    g.open(":memory:")
    yield g
    if store.is_open:
        g.close()


@pytest.fixture
def dump_text():
    """Render g.dump() to a string."""
    def _dump(g):
        buf = io.StringIO()
        g.dump(buf)
        return buf.getvalue()
    return _dump
