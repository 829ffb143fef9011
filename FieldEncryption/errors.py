"""
FIELD ENCRYPTION ERRORS
=======================
Exception taxonomy shared by the cipher, resolvers and transformer.
"""

# FLOW:
# - InvalidArgument is raised for blank plaintext/passphrase/envelope.
# - MalformedEnvelope is raised inside decrypt and turned into "".
# - KeyResolutionFailure is raised when a key path has no passphrase.
# WHY:
# - Callers must tell configuration errors apart from stale ciphertext.
# HOW:
# - Subclasses of the matching builtin errors.

from __future__ import annotations


class FieldEncryptionError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(FieldEncryptionError, ValueError):
    def __init__(self, param_name: str):
        self.param_name = param_name
        super().__init__(f"'{param_name}' must contain a value.")


class MalformedEnvelope(FieldEncryptionError, ValueError):
    """Envelope could not be turned back into plaintext.

    ``reason`` is one of ``base64``, ``iv``, ``ciphertext``, ``padding`` or
    ``utf-8``. Never carries key material or plaintext.
    """

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or f"malformed envelope ({reason})")


class KeyResolutionFailure(FieldEncryptionError, LookupError):
    def __init__(self, key_path: str, message: str | None = None):
        self.key_path = key_path
        super().__init__(message or f"no passphrase configured for '{key_path}'")

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedFieldType(FieldEncryptionError, TypeError):
    """A non-string field was bound to an encryption key."""
