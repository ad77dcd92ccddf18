# logger_utils.py - logging setup and timing helpers

import logging
import time
from contextlib import contextmanager
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

# handler installed by setup_logging, replaced on the next call
_handler: Optional[logging.Handler] = None


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Install a Rich handler on the `uonum` logger.
    Messages go to stderr so generated text on stdout stays clean.
    Calling it twice replaces the previous handler instead of stacking.
    """
    global _handler

    root = logging.getLogger("uonum")
    if _handler is not None:
        root.removeHandler(_handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handler = handler

    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return root


@contextmanager
def time_block(label: str, logger: Optional[logging.Logger] = None):
    """
    Measure a code block and log the duration at DEBUG:
        with time_block("register"):
            do_some_work()
    """
    log = logger or logging.getLogger("uonum")
    start = time.perf_counter()
    try:
        yield
    finally:
        dur = round(time.perf_counter() - start, 3)
        log.debug("%s done in %ss", label, dur)
