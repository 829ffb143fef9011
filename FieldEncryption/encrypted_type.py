"""
ENCRYPTED SQLALCHEMY TYPES
==========================
Field-level encryption for SQLAlchemy String/Text columns.
"""

# FLOW:
# - Encrypt on bind (write) and decrypt on result (read).
# - Passphrase comes from the key resolver under the column's key path.
# WHY:
# - Sensitive columns stay encrypted at rest transparently.
# HOW:
# - SQLAlchemy TypeDecorator wraps String/Text columns.

from __future__ import annotations

from sqlalchemy.types import String, Text, TypeDecorator

from FieldEncryption.errors import UnsupportedFieldType
from FieldEncryption.field_level_encryption import decrypt_field, encrypt_field
from FieldEncryption.key_management import KeyResolver


class _EncryptedColumn(TypeDecorator):
    cache_ok = True

    def __init__(self, key_path: str, resolver: KeyResolver, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.key_path = key_path
        self.resolver = resolver

    def _is_blank(self, value) -> bool:
        if value is not None and not isinstance(value, str):
            raise UnsupportedFieldType(
                f"column encrypted under '{self.key_path}' got {type(value).__name__}; only str values can be encrypted"
            )
        return value is None or not value.strip()

    def process_bind_param(self, value, dialect):
        if self._is_blank(value):
            return value
        return encrypt_field(value, self.resolver(self.key_path))

    def process_result_value(self, value, dialect):
        if self._is_blank(value):
            return value
        return decrypt_field(value, self.resolver(self.key_path))


class EncryptedString(_EncryptedColumn):
    impl = String

    def __init__(self, key_path: str, resolver: KeyResolver, length=None, **kwargs):
        super().__init__(key_path, resolver, length, **kwargs)


class EncryptedText(_EncryptedColumn):
    impl = Text
