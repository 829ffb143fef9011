"""
KEY MANAGEMENT
==============
Resolve key paths such as "secrets:ssnKey" to passphrases.

FLOW:
- MappingKeyResolver walks nested config sections by ":".
- EnvironmentKeyResolver reads SECRETS__SSNKEY from env, then the .env file.
- ChainedKeyResolver tries several resolvers in order.
- ensure_passphrase() creates a strong passphrase if missing.
WHY:
- Keeps passphrases out of code and out of the record types.
HOW:
- Any callable key_path -> str works; a missing or blank value raises
  KeyResolutionFailure.
"""

from __future__ import annotations

import os
import secrets
from typing import Callable, Mapping, Optional

import dotenv

from FieldEncryption.encryption_config import env_path
from FieldEncryption.encryption_logging import get_logger
from FieldEncryption.errors import KeyResolutionFailure


KeyResolver = Callable[[str], str]

PLACEHOLDERS = {"", "CHANGE_ME", "REPLACE_WITH_PASSPHRASE", "AUTO_GENERATE"}

logger = get_logger("field_encryption.keys")


def env_var_name(key_path: str) -> str:
    return key_path.replace(":", "__").upper()


def _checked(key_path: str, value) -> str:
    if not isinstance(value, str) or value.strip() in PLACEHOLDERS:
        logger.error("key resolution failed key_path=%s", key_path)
        raise KeyResolutionFailure(key_path)
    return value


def _lookup(mapping: Mapping, name: str):
    if name in mapping:
        return mapping[name]
    lowered = name.lower()
    for key, value in mapping.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    raise KeyError(name)


class MappingKeyResolver:
    """Configuration-section lookup over nested mappings."""

    def __init__(self, mapping: Mapping):
        self.mapping = mapping

    def __call__(self, key_path: str) -> str:
        try:
            value = _lookup(self.mapping, key_path)
        except KeyError:
            value = self.mapping
            for section in key_path.split(":"):
                if not isinstance(value, Mapping):
                    value = None
                    break
                try:
                    value = _lookup(value, section)
                except KeyError:
                    value = None
                    break
        return _checked(key_path, value)


class EnvironmentKeyResolver:
    def __init__(self, env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self.env_file = env_file or env_path()
        self.environ = environ
        self.reload()

    def reload(self) -> None:
        if os.path.exists(self.env_file):
            self._file_values = {k: v for k, v in dotenv.dotenv_values(self.env_file).items() if v is not None}
        else:
            self._file_values = {}

    def __call__(self, key_path: str) -> str:
        name = env_var_name(key_path)
        environ = os.environ if self.environ is None else self.environ
        for source in (environ, self._file_values):
            try:
                value = _lookup(source, name)
            except KeyError:
                continue
            if value and value.strip() not in PLACEHOLDERS:
                return value
        return _checked(key_path, None)


class ChainedKeyResolver:
    def __init__(self, *resolvers: KeyResolver):
        self.resolvers = resolvers

    def __call__(self, key_path: str) -> str:
        for resolver in self.resolvers:
            try:
                return resolver(key_path)
            except KeyResolutionFailure:
                continue
        raise KeyResolutionFailure(key_path)


def _upsert(lines_list, key, value):
    if any(line.startswith(f"{key}=") for line in lines_list):
        return [f"{key}=\"{value}\"" if line.startswith(f"{key}=") else line for line in lines_list]
    return lines_list + [f"{key}=\"{value}\""]


def ensure_passphrase(key_path: str, env_file: Optional[str] = None) -> str:
    """Ensure a strong passphrase for ``key_path`` exists in .env and environment."""
    env_file = env_file or env_path()
    name = env_var_name(key_path)
    dotenv.load_dotenv(env_file)
    raw = os.getenv(name)
    if raw and raw.strip() not in PLACEHOLDERS:
        return raw

    passphrase = secrets.token_urlsafe(48)
    os.environ[name] = passphrase

    if os.path.exists(env_file):
        with open(env_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
        content = "\n".join(_upsert(lines, name, passphrase)) + "\n"
    else:
        content = f"{name}=\"{passphrase}\"\n"

    with open(env_file, "w", encoding="utf-8") as f:
        f.write(content)

    logger.info("passphrase generated key_path=%s env_file=%s", key_path, env_file)
    return passphrase
