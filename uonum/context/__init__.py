# uonum/context/__init__.py
# turning raw text into tokens the transition graph understands

from .tokenizer import BOS, EOS, SpacyTokenizer, Token, clean_tokens, token_features

__all__ = [
    "BOS",
    "EOS",
    "SpacyTokenizer",
    "Token",
    "clean_tokens",
    "token_features",
]
