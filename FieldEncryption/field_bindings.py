"""
FIELD BINDINGS
==============
Declare which record fields are encrypted and under which key path.

FLOW:
- encrypted("secrets:ssnKey") marks a dataclass field.
- __encrypted_fields__ / register_binding() cover types without field metadata.
- bindings_for() merges all three once per type and caches the result.

WHY:
- Record types stay unaware of encryption; the table is built once per type.

HOW:
- dataclasses field metadata, a registry guarded by a lock, MRO walk.
"""

from __future__ import annotations

import dataclasses
import threading
import types
import typing
from typing import NamedTuple

from FieldEncryption.errors import InvalidArgument, UnsupportedFieldType


KEY_PATH_METADATA = "field_encryption.key_path"

_STRING_ANNOTATIONS = {
    "str",
    "Optional[str]",
    "typing.Optional[str]",
    "str | None",
    "None | str",
}

_REGISTRY: dict[type, dict[str, str]] = {}
_CACHE: dict[type, tuple["FieldBinding", ...]] = {}
_LOCK = threading.Lock()


class FieldBinding(NamedTuple):
    field_name: str
    key_path: str


def _check_key_path(key_path) -> None:
    if not isinstance(key_path, str) or not key_path.strip():
        raise InvalidArgument("key_path")


def encrypted(key_path: str, **field_kwargs):
    """dataclasses.field() whose value is encrypted under ``key_path``.

    Defaults to ``None`` unless ``default``/``default_factory`` is given.
    """
    _check_key_path(key_path)
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[KEY_PATH_METADATA] = key_path
    if "default" not in field_kwargs and "default_factory" not in field_kwargs:
        field_kwargs["default"] = None
    return dataclasses.field(metadata=metadata, **field_kwargs)


def register_binding(record_type: type, field_name: str, key_path: str) -> None:
    """Bind ``record_type.field_name`` to ``key_path``.

    Meant for import time; it drops every cached binding table.
    """
    _check_key_path(key_path)
    with _LOCK:
        _REGISTRY.setdefault(record_type, {})[field_name] = key_path
        _CACHE.clear()


def clear_registry() -> None:
    with _LOCK:
        _REGISTRY.clear()
        _CACHE.clear()


def _is_string_type(hint) -> bool:
    if hint is str:
        return True
    if isinstance(hint, str):
        return hint.replace("'", "").replace('"', "").strip() in _STRING_ANNOTATIONS
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return args == [str]
    return False


def _type_hints(record_type: type) -> dict:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError):
        hints: dict = {}
        for klass in reversed(record_type.__mro__):
            hints.update(getattr(klass, "__annotations__", {}) or {})
        return hints


def _discover(record_type: type) -> tuple[FieldBinding, ...]:
    bindings: dict[str, str] = {}
    if dataclasses.is_dataclass(record_type):
        for f in dataclasses.fields(record_type):
            key_path = f.metadata.get(KEY_PATH_METADATA)
            if key_path:
                bindings[f.name] = key_path

    for klass in reversed(record_type.__mro__):
        declared = klass.__dict__.get("__encrypted_fields__")
        if declared:
            for field_name, key_path in declared.items():
                _check_key_path(key_path)
                bindings[field_name] = key_path

    for klass in reversed(record_type.__mro__):
        bindings.update(_REGISTRY.get(klass, {}))

    hints = _type_hints(record_type)
    for field_name in bindings:
        # Unannotated attributes are checked at transform time instead.
        if field_name in hints and not _is_string_type(hints[field_name]):
            raise UnsupportedFieldType(
                f"{record_type.__name__}.{field_name} is bound to an encryption key "
                f"but is declared as {hints[field_name]!r}; only str fields can be encrypted"
            )

    return tuple(FieldBinding(name, key_path) for name, key_path in bindings.items())


def bindings_for(record_type: type) -> tuple[FieldBinding, ...]:
    cached = _CACHE.get(record_type)
    if cached is not None:
        return cached
    with _LOCK:
        cached = _CACHE.get(record_type)
        if cached is None:
            cached = _discover(record_type)
            _CACHE[record_type] = cached
        return cached
