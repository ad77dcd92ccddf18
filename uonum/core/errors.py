# uonum/core/errors.py
# exception hierarchy shared by the generator, the stores and the CLI


class UonumError(Exception):
    """Base class for every error raised by uonum."""


class StoreNotOpenError(UonumError):
    """An operation needed the store before open() or after close()."""

    def __init__(self, msg: str = "Database is not opened."):
        super().__init__(msg)


class StoreIOError(UonumError):
    """The underlying store failed (open, read, write, commit)."""


class RecordDecodeError(UonumError):
    """Stored bytes for `key` could not be parsed into a WordLink."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"[{key}] could not decode record: {reason}")


class RecordEncodeError(UonumError):
    """A WordLink could not be serialized."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"[{key}] could not encode record: {reason}")


class InputIOError(UonumError):
    """Source text could not be read."""


class ConfigError(UonumError):
    """Config file exists but cannot be used."""
