"""Hashing of attested data; only the digest goes on-chain."""

import hashlib


def sha256_hash(data: str) -> bytes:
    return hashlib.sha256(data.encode("utf-8")).digest()
