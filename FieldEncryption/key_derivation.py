"""
KEY DERIVATION
==============
SHA-256 passphrase hashing into a fixed-size AES-256 key.

FLOW:
- derive_key() returns the same 32 bytes for the same passphrase.

WHY:
- Passphrases of any length must map onto one AES key size.

HOW:
- Computes SHA-256 over the UTF-8 bytes of the passphrase.
"""

from __future__ import annotations

import hashlib


KEY_SIZE = 32


def sha256_digest(data: str | bytes) -> bytes:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).digest()


def derive_key(passphrase: str) -> bytes:
    return sha256_digest(passphrase)
