"""
AES STRING ENCRYPTION
=====================
AES-256-CBC helpers turning one string into a self-contained envelope.

FLOW:
- encrypt() derives a key from the passphrase and returns base64(IV + ciphertext).
- decrypt() reverses it and returns "" whenever the envelope cannot be read.
- decrypt_with_diagnostics() returns the same plaintext plus the failure, if any.

WHY:
- Lets a single field travel encrypted inside an otherwise plaintext document.

HOW:
- SHA-256 key derivation, random 16-byte IV per call, PKCS#7 padding.
"""

from __future__ import annotations

import base64
import os
from typing import NamedTuple, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from FieldEncryption.encryption_logging import get_logger
from FieldEncryption.errors import InvalidArgument, MalformedEnvelope
from FieldEncryption.key_derivation import derive_key
from FieldEncryption.metrics import increment_event


IV_SIZE = 16
BLOCK_SIZE_BITS = algorithms.AES.block_size

logger = get_logger("field_encryption.cipher")


class DecryptResult(NamedTuple):
    plaintext: str
    error: Optional[MalformedEnvelope] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _require_value(value, param_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(param_name)


def encrypt(plaintext: str, passphrase: str) -> str:
    """Encrypt ``plaintext`` under ``passphrase``. Returns a base64 envelope."""
    _require_value(plaintext, "plaintext")
    _require_value(passphrase, "passphrase")

    key = derive_key(passphrase)
    iv = os.urandom(IV_SIZE)
    padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    increment_event("encrypt")
    return base64.b64encode(iv + ciphertext).decode("ascii")


def _open_envelope(envelope: str, key: bytes) -> str:
    try:
        # Embedded whitespace and line breaks are ignored, as wrapped base64 often has them.
        raw = base64.b64decode("".join(envelope.split()), validate=True)
    except ValueError as exc:
        raise MalformedEnvelope("base64") from exc

    if len(raw) < IV_SIZE:
        raise MalformedEnvelope("iv", "Invalid or missing IV.")
    iv, ciphertext = raw[:IV_SIZE], raw[IV_SIZE:]

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    try:
        padded = decryptor.update(ciphertext) + decryptor.finalize()
    except ValueError as exc:
        raise MalformedEnvelope("ciphertext") from exc

    unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
    try:
        data = unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise MalformedEnvelope("padding") from exc

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedEnvelope("utf-8") from exc


def decrypt_with_diagnostics(envelope: str, passphrase: str) -> DecryptResult:
    """Decrypt ``envelope``, reporting why it failed instead of raising.

    Blank arguments still raise :class:`InvalidArgument`.
    """
    _require_value(envelope, "envelope")
    _require_value(passphrase, "passphrase")

    try:
        plaintext = _open_envelope(envelope, derive_key(passphrase))
    except MalformedEnvelope as exc:
        increment_event("decrypt_failure")
        logger.warning("decrypt failed reason=%s", exc.reason)
        return DecryptResult("", exc)

    increment_event("decrypt")
    return DecryptResult(plaintext)


def decrypt(envelope: str, passphrase: str) -> str:
    """Decrypt ``envelope`` under ``passphrase``. Returns "" if it cannot be read."""
    return decrypt_with_diagnostics(envelope, passphrase).plaintext
