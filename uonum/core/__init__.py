"""
uonum.core

The transition-graph model:
 - WordLink nodes and their key scheme (word_link)
 - per-text bigram counting (transitions)
 - MarkovGenerator: register / generate / dump over a bucket store
 - Protocols the generator is wired from, and the error hierarchy
"""

from .errors import (
    ConfigError,
    InputIOError,
    RecordDecodeError,
    RecordEncodeError,
    StoreIOError,
    StoreNotOpenError,
    UonumError,
)
from .generator import DEFAULT_CLASS, DEFAULT_TERM_WORDS, MarkovGenerator
from .protocols import GeneratorProtocol, StoreProtocol, TokenizerProtocol, TransactionProtocol
from .transitions import build_links
from .word_link import WordLink, make_key

__all__ = [
    "ConfigError",
    "DEFAULT_CLASS",
    "DEFAULT_TERM_WORDS",
    "GeneratorProtocol",
    "InputIOError",
    "MarkovGenerator",
    "RecordDecodeError",
    "RecordEncodeError",
    "StoreIOError",
    "StoreNotOpenError",
    "StoreProtocol",
    "TokenizerProtocol",
    "TransactionProtocol",
    "UonumError",
    "WordLink",
    "build_links",
    "make_key",
]
