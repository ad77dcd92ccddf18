"""
uonum - part-of-speech aware Markov text generator.

    from uonum import MarkovGenerator

    with MarkovGenerator() as g:
        g.open("uonum.db")
        g.register("犬が走る。")
        print(g.generate("犬"))
"""

from uonum.core import (
    DEFAULT_CLASS,
    DEFAULT_TERM_WORDS,
    MarkovGenerator,
    UonumError,
    WordLink,
)

__all__ = [
    "DEFAULT_CLASS",
    "DEFAULT_TERM_WORDS",
    "MarkovGenerator",
    "UonumError",
    "WordLink",
]

__version__ = "0.1.0"
