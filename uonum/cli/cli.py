"""
cli.py - command line front end for the generator

    uonum [options] register [input file]
    uonum [options] generate [trigger word] [--class CLASS]
    uonum [options] dump
    uonum [options] texts
    uonum [options] config [key value]

register reads one sentence per line (stdin when no file is given).
generate asks for a trigger word when none is passed.
Exit code is 0 on success and 1 on any uonum error.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich import box

from uonum.context.tokenizer import SpacyTokenizer
from uonum.core.errors import ConfigError, InputIOError, UonumError
from uonum.core.generator import MarkovGenerator
from uonum.storage.lmdb_store import LmdbStore
from uonum.utils.config_manager import Config
from uonum.utils.logger_utils import setup_logging, time_block

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

DEFAULT_CONFIG = os.path.join(os.path.expanduser("~"), ".uonum.json")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="uonum", description="Part-of-speech aware Markov text generator.")
    p.add_argument("--db", help="database path (default from config, ~/uonum.db)")
    p.add_argument("--config", default=DEFAULT_CONFIG, help="JSON config file")
    p.add_argument("-v", "--verbose", action="store_true", help="verbose messages")

    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("register", help="learn sentences, one per line")
    r.add_argument("input", nargs="?", help="input file (stdin when omitted)")

    g = sub.add_parser("generate", help="generate text from a trigger word")
    g.add_argument("trigger", nargs="?", help="trigger word (prompted when omitted)")
    g.add_argument("--class", dest="word_class", help="grammatical class of the trigger")
    g.add_argument("--seed", type=int, help="seed for edge selection")
    g.add_argument("--max-steps", type=int, help="stop after this many words")

    sub.add_parser("dump", help="print the transition table")
    sub.add_parser("texts", help="print the registered texts")

    c = sub.add_parser("config", help="show the settings, or set one")
    c.add_argument("key", nargs="?", help="option to set")
    c.add_argument("value", nargs="?", help="new value (lists are comma separated)")
    return p


def build_generator(cfg: Config, seed: Optional[int] = None) -> MarkovGenerator:
    return MarkovGenerator(
        tokenizer=SpacyTokenizer(cfg["spacy_model"]),
        store=LmdbStore(map_size=cfg["map_size"]),
        term_words=cfg["term_words"],
        default_class=cfg["default_class"],
        seed=seed if seed is not None else cfg["seed"],
    )


# COMMANDS -----------------------------------------------------------------
def cmd_register(g: MarkovGenerator, args, cfg: Config) -> int:
    if args.input:
        try:
            f = open(args.input, "r", encoding="utf8")
        except OSError as e:
            raise InputIOError(f"Could not open the input file [{args.input}].") from e
    else:
        f = sys.stdin

    n = 0
    try:
        with time_block("register input", logger):
            for line in f:
                g.register(line.rstrip("\r\n"))
                n += 1
    except (OSError, UnicodeDecodeError) as e:
        raise InputIOError(f"Could not read input: {e}") from e
    finally:
        if f is not sys.stdin:
            f.close()

    logger.info("registered %d line(s)", n)
    return 0


def cmd_generate(g: MarkovGenerator, args, cfg: Config) -> int:
    trigger = args.trigger or ""
    while not trigger:
        try:
            trigger = Prompt.ask("Trigger word", console=console).strip()
        except EOFError as e:
            raise InputIOError("Could not read trigger word.") from e

    max_steps = args.max_steps if args.max_steps is not None else cfg["max_steps"]
    text = g.generate(trigger, args.word_class, max_steps=max_steps)
    console.print(escape(text), highlight=False)
    return 0


def cmd_dump(g: MarkovGenerator, args, cfg: Config) -> int:
    # plain stdout: the listing is meant to be diffed, not styled
    try:
        g.dump(sys.stdout)
    finally:
        sys.stdout.flush()
    return 0


def cmd_texts(g: MarkovGenerator, args, cfg: Config) -> int:
    table = Table(title="Registered texts", box=box.SIMPLE)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Text")
    for seq, text in g.texts():
        table.add_row(str(seq), escape(text))
    console.print(table)
    return 0


def cmd_config(cfg: Config, args) -> int:
    if args.key is None:
        table = Table(title="Config", box=box.SIMPLE)
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for k, v in cfg.show():
            table.add_row(k, escape(json.dumps(v, ensure_ascii=False)))
        console.print(table)
        return 0

    if args.value is None:
        raise ConfigError("usage: uonum config [key value]")
    cfg.set(args.key, args.value)
    logger.info("%s = %r", args.key, cfg[args.key])
    return 0


COMMANDS = {
    "register": cmd_register,
    "generate": cmd_generate,
    "dump": cmd_dump,
    "texts": cmd_texts,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, console=err_console)

    try:
        cfg = Config(args.config)
        if args.command == "config":
            return cmd_config(cfg, args)

        db_path = os.path.expanduser(args.db or cfg["db_path"])
        g = build_generator(cfg, getattr(args, "seed", None))
        g.open(db_path)
        with g:
            return COMMANDS[args.command](g, args, cfg)
    except UonumError as e:
        if args.verbose:
            logger.exception("%s failed", args.command)
        else:
            logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
