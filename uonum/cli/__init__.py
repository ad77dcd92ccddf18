# uonum/cli/__init__.py

from .cli import build_generator, build_parser, main

__all__ = ["build_generator", "build_parser", "main"]
