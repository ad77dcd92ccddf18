# uonum/storage/base.py
# bucket names and key helpers shared by the store backends

BUCKET_WORDS = "words"
BUCKET_TEXTS = "texts"
BUCKETS = (BUCKET_WORDS, BUCKET_TEXTS)


def itob(v: int) -> bytes:
    """8-byte big endian key, so byte order equals numeric order."""
    return v.to_bytes(8, "big")


def btoi(b: bytes) -> int:
    return int.from_bytes(bytes(b), "big")
