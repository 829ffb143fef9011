"""
SENSITIVE FIELD PROTECTION
==========================
Per-field encryption of records around serialization.
"""

# FLOW:
# - on_serialize() encrypts every bound, non-blank field in place.
# - on_deserialize() decrypts them back; unreadable values become "".
# - encrypt_field()/decrypt_field() handle single values.
# WHY:
# - Protects individual fields without encrypting the whole document.
# HOW:
# - Bindings from field_bindings, passphrases from a key resolver,
#   cipher from aes_string_encryption.

from __future__ import annotations

from typing import Dict, Generic, List, Optional, Tuple, Type, TypeVar

from FieldEncryption.aes_string_encryption import decrypt_with_diagnostics, encrypt
from FieldEncryption.encryption_logging import get_logger
from FieldEncryption.errors import MalformedEnvelope, UnsupportedFieldType
from FieldEncryption.field_bindings import FieldBinding, bindings_for
from FieldEncryption.key_management import KeyResolver


T = TypeVar("T")

FieldFailures = List[Tuple[str, MalformedEnvelope]]

logger = get_logger("field_encryption.transform")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def encrypt_field(value: str | None, passphrase: str) -> str | None:
    if _is_blank(value):
        return value
    return encrypt(value, passphrase)


def decrypt_field(token: str | None, passphrase: str) -> str | None:
    if _is_blank(token):
        return token
    return decrypt_with_diagnostics(token, passphrase).plaintext


class FieldTransformer(Generic[T]):
    """Encrypts/decrypts the bound fields of ``record_type`` instances."""

    def __init__(self, record_type: Type[T], resolver: KeyResolver):
        self.record_type = record_type
        self.resolver = resolver
        # Fail on bad bindings at construction rather than mid-document.
        bindings_for(record_type)

    def can_convert(self, type_to_convert: type) -> bool:
        return isinstance(type_to_convert, type) and issubclass(type_to_convert, self.record_type)

    def _bound_values(self, value: T) -> List[Tuple[FieldBinding, str]]:
        if not self.can_convert(type(value)):
            raise TypeError(
                f"{type(value).__name__} is not a {self.record_type.__name__}"
            )
        bound = []
        for binding in bindings_for(type(value)):
            current = getattr(value, binding.field_name, None)
            if current is not None and not isinstance(current, str):
                raise UnsupportedFieldType(
                    f"{type(value).__name__}.{binding.field_name} holds "
                    f"{type(current).__name__}; only str values can be encrypted"
                )
            if _is_blank(current):
                continue
            bound.append((binding, current))
        return bound

    def encrypted_values(self, value: T) -> Dict[str, str]:
        """Envelopes for every bound, non-blank field. ``value`` is not modified."""
        return {
            binding.field_name: encrypt(plaintext, self.resolver(binding.key_path))
            for binding, plaintext in self._bound_values(value)
        }

    def decrypted_values(self, value: T, failures: Optional[FieldFailures] = None) -> Dict[str, str]:
        """Plaintexts for every bound, non-blank field. ``value`` is not modified."""
        decrypted: Dict[str, str] = {}
        blanked: FieldFailures = []
        for binding, envelope in self._bound_values(value):
            result = decrypt_with_diagnostics(envelope, self.resolver(binding.key_path))
            if not result.ok:
                self._report(value, binding, result.error)
                blanked.append((binding.field_name, result.error))
            decrypted[binding.field_name] = result.plaintext
        if failures is not None:
            failures.extend(blanked)
        return decrypted

    # Values are computed before any write so a failing field leaves the record untouched.
    def on_serialize(self, value: T) -> T:
        for field_name, envelope in self.encrypted_values(value).items():
            setattr(value, field_name, envelope)
        return value

    def on_deserialize(self, value: T, failures: Optional[FieldFailures] = None) -> T:
        for field_name, plaintext in self.decrypted_values(value, failures).items():
            setattr(value, field_name, plaintext)
        return value

    def _report(self, value, binding: FieldBinding, error: MalformedEnvelope) -> None:
        logger.warning(
            "field blanked record=%s field=%s key_path=%s reason=%s",
            type(value).__name__,
            binding.field_name,
            binding.key_path,
            error.reason,
        )
