# config_manager.py - JSON config manager

import json
import logging
import os
from typing import Any, Dict, Optional

from uonum.core.errors import ConfigError

logger = logging.getLogger(__name__)


def default_db_path() -> str:
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE") or "."
    return os.path.join(home, "uonum.db")


DEFAULTS: Dict[str, Any] = {
    "db_path": None,  # resolved from $HOME at load time
    "term_words": ["。", "."],
    "default_class": "名詞",  # tokenizer's common noun class
    "spacy_model": "ja",
    "map_size": 1 << 30,
    "max_steps": None,  # None = walk until terminal word or dead end
    "seed": None,
}

INT_KEYS = ("map_size", "max_steps", "seed")
LIST_KEYS = ("term_words",)
STR_KEYS = ("db_path", "default_class", "spacy_model")
REQUIRED_KEYS = ("map_size",) + STR_KEYS  # None is not allowed


def check_value(key: str, val: Any) -> None:
    """Raise ConfigError unless `val` has the type `key` needs."""
    if val is None:
        ok = key not in REQUIRED_KEYS
    elif key in INT_KEYS:
        ok = isinstance(val, int) and not isinstance(val, bool)
    elif key in LIST_KEYS:
        ok = isinstance(val, list) and all(isinstance(w, str) for w in val)
    else:
        ok = isinstance(val, str)
    if not ok:
        raise ConfigError(f"Bad value for {key}: {val!r}")


class Config:
    """
    Settings for the generator and the CLI.
    Values from the JSON file at `path` override DEFAULTS; a missing file just
    means defaults. Unlike a user typo, a broken file is an error.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self.data["db_path"] = default_db_path()
        self.data["term_words"] = list(DEFAULTS["term_words"])
        if path:
            self._load()

    def _load(self):
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not read config [{self.path}]: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config [{self.path}] must be a JSON object.")

        for k, v in loaded.items():
            if k not in self.data:
                logger.warning("ignoring unknown config key %r", k)
                continue
            check_value(k, v)
            self.data[k] = v

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def save(self):
        if not self.path:
            raise ConfigError("Config has no file path to save to.")
        try:
            with open(self.path, "w", encoding="utf8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Could not save config [{self.path}]: {e}") from e

    def set(self, key: str, val: Any):
        """Set an option, coercing to the default's type, and persist it."""
        if key not in self.data:
            raise ConfigError(f"No such option: {key}")
        if isinstance(val, str):
            try:
                if key in INT_KEYS:
                    val = None if val.lower() in ("", "none") else int(val)
                elif key in LIST_KEYS:
                    val = [w for w in val.split(",") if w]
            except ValueError as e:
                raise ConfigError(f"Bad value for {key}: {val!r}") from e
        check_value(key, val)
        self.data[key] = val
        self.save()

    def show(self):
        return [(k, self.data[k]) for k in sorted(self.data)]
