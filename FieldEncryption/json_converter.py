"""
ENCRYPTED JSON CONVERTER
========================
JSON (de)serialization of dataclass records with encrypted fields.

FLOW:
- dumps() encrypts into a new record via dataclasses.replace(), writes JSON.
- loads() reads JSON into the record type, then replaces bound fields with plaintext.

WHY:
- Sensitive values stay encrypted inside an otherwise readable document.

HOW:
- dataclasses.asdict / record_type(**fields) around a FieldTransformer.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from FieldEncryption.field_bindings import bindings_for
from FieldEncryption.field_level_encryption import FieldFailures, FieldTransformer
from FieldEncryption.key_management import KeyResolver


T = TypeVar("T")


class EncryptedJsonConverter(Generic[T]):
    def __init__(self, record_type: Type[T], resolver: KeyResolver):
        if not dataclasses.is_dataclass(record_type) or not isinstance(record_type, type):
            raise TypeError(f"{record_type!r} is not a dataclass type")
        self.record_type = record_type
        self.transformer = FieldTransformer(record_type, resolver)
        init_fields = {f.name for f in dataclasses.fields(record_type) if f.init}
        for binding in bindings_for(record_type):
            if binding.field_name not in init_fields:
                raise TypeError(
                    f"{record_type.__name__}.{binding.field_name} is encrypted but not an __init__ field"
                )

    def can_convert(self, type_to_convert: type) -> bool:
        return self.transformer.can_convert(type_to_convert)

    def to_document(self, value: T) -> Dict[str, Any]:
        # replace() builds a new record, so frozen types work and the caller keeps plaintext.
        return dataclasses.asdict(dataclasses.replace(value, **self.transformer.encrypted_values(value)))

    def dumps(self, value: T, **json_kwargs) -> str:
        return json.dumps(self.to_document(value), **json_kwargs)

    def from_document(self, document: Dict[str, Any], failures: Optional[FieldFailures] = None) -> T:
        if not isinstance(document, dict):
            raise TypeError(f"expected a JSON object, got {type(document).__name__}")
        names = {f.name for f in dataclasses.fields(self.record_type) if f.init}
        record = self.record_type(**{k: v for k, v in document.items() if k in names})
        return dataclasses.replace(record, **self.transformer.decrypted_values(record, failures))

    def loads(self, text: str | bytes, failures: Optional[FieldFailures] = None) -> T:
        return self.from_document(json.loads(text), failures)
