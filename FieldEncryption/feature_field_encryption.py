"""
FEATURE: FIELD-LEVEL ENCRYPTION
"""

# FLOW:
# - Re-export the cipher, bindings, transformer and host adapters.
# WHY:
# - One import site for application code.
# HOW:
# - Re-exports public names.

from FieldEncryption.aes_string_encryption import DecryptResult, decrypt, decrypt_with_diagnostics, encrypt
from FieldEncryption.encrypted_type import EncryptedString, EncryptedText
from FieldEncryption.errors import (
    FieldEncryptionError,
    InvalidArgument,
    KeyResolutionFailure,
    MalformedEnvelope,
    UnsupportedFieldType,
)
from FieldEncryption.field_bindings import FieldBinding, bindings_for, encrypted, register_binding
from FieldEncryption.field_level_encryption import FieldTransformer, decrypt_field, encrypt_field
from FieldEncryption.json_converter import EncryptedJsonConverter

__all__ = [
    "DecryptResult",
    "EncryptedJsonConverter",
    "EncryptedString",
    "EncryptedText",
    "FieldBinding",
    "FieldEncryptionError",
    "FieldTransformer",
    "InvalidArgument",
    "KeyResolutionFailure",
    "MalformedEnvelope",
    "UnsupportedFieldType",
    "bindings_for",
    "decrypt",
    "decrypt_field",
    "decrypt_with_diagnostics",
    "encrypt",
    "encrypt_field",
    "encrypted",
    "register_binding",
]
