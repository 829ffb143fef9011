"""Unit tests for the AES string cipher: envelopes, wrong keys, malformed input."""
import base64
import hashlib

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from FieldEncryption.aes_string_encryption import (
    IV_SIZE,
    decrypt,
    decrypt_with_diagnostics,
    encrypt,
)
from FieldEncryption.errors import InvalidArgument, MalformedEnvelope
from FieldEncryption.key_derivation import KEY_SIZE, derive_key


@pytest.mark.parametrize("plaintext", [
    "secret",
    "123-45-6789",
    "exactly sixteen!",
    "ünïcødé ✓ 秘密",
    "a" * 1000,
    "  padded with spaces  ",
])
def test_round_trip(plaintext):
    assert decrypt(encrypt(plaintext, "key"), "key") == plaintext


def test_same_input_gives_different_envelopes():
    first = encrypt("secret", "key")
    second = encrypt("secret", "key")
    assert first != second
    assert decrypt(first, "key") == "secret"
    assert decrypt(second, "key") == "secret"


def test_envelope_is_iv_plus_padded_ciphertext():
    raw = base64.b64decode(encrypt("secret", "key"))
    assert len(raw) == IV_SIZE + 16

    raw = base64.b64decode(encrypt("exactly sixteen!", "key"))
    # A full block of padding is added to block-aligned input.
    assert len(raw) == IV_SIZE + 32


def test_decrypts_envelope_built_outside_the_package():
    key = hashlib.sha256(b"correct-horse").digest()
    iv = bytes(range(16))
    padder = padding.PKCS7(128).padder()
    data = padder.update("123-45-6789".encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    envelope = base64.b64encode(iv + encryptor.update(data) + encryptor.finalize()).decode()

    assert decrypt(envelope, "correct-horse") == "123-45-6789"


def test_wrong_key_returns_empty_string():
    assert decrypt(encrypt("secret", "keyA"), "keyB") == ""


def test_wrong_key_diagnostics():
    result = decrypt_with_diagnostics(encrypt("secret", "keyA"), "keyB")
    assert result.plaintext == ""
    assert not result.ok
    assert isinstance(result.error, MalformedEnvelope)
    assert result.error.reason in {"padding", "utf-8"}


def test_short_input_returns_empty_string():
    assert decrypt("short", "anykey") == ""


@pytest.mark.parametrize("envelope,reason", [
    ("short", "base64"),
    ("not base64 at all!", "base64"),
    (base64.b64encode(b"\x00" * 10).decode(), "iv"),
    (base64.b64encode(b"\x00" * (IV_SIZE + 5)).decode(), "ciphertext"),
    (base64.b64encode(b"\x00" * IV_SIZE).decode(), "padding"),
])
def test_malformed_envelope_reasons(envelope, reason):
    result = decrypt_with_diagnostics(envelope, "anykey")
    assert result.plaintext == ""
    assert result.error.reason == reason


def test_successful_decrypt_has_no_error():
    result = decrypt_with_diagnostics(encrypt("secret", "key"), "key")
    assert result.ok
    assert result.error is None
    assert result.plaintext == "secret"


@pytest.mark.parametrize("func", [encrypt, decrypt, decrypt_with_diagnostics])
@pytest.mark.parametrize("text,key,param", [
    ("", "key", None),
    ("   ", "key", None),
    ("text", "", "passphrase"),
    ("text", " \t", "passphrase"),
    (None, "key", None),
])
def test_blank_arguments_raise(func, text, key, param):
    with pytest.raises(InvalidArgument) as exc:
        func(text, key)
    expected = param or ("plaintext" if func is encrypt else "envelope")
    assert exc.value.param_name == expected
    assert expected in str(exc.value)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        encrypt("", "key")


def test_derived_key_is_fixed_length_and_deterministic():
    assert len(derive_key("k")) == KEY_SIZE
    assert len(derive_key("k" * 500)) == KEY_SIZE
    assert derive_key("passphrase") == derive_key("passphrase")
    assert derive_key("passphrase") != derive_key("passphrase2")


def test_line_wrapped_envelope_is_accepted():
    envelope = encrypt("a value long enough to need several base64 lines" * 3, "key")
    wrapped = "\r\n".join(envelope[i:i + 20] for i in range(0, len(envelope), 20))
    spaced = " ".join(envelope[i:i + 8] for i in range(0, len(envelope), 8))

    assert decrypt(wrapped, "key") == "a value long enough to need several base64 lines" * 3
    assert decrypt(f"  {spaced}\n", "key") == "a value long enough to need several base64 lines" * 3
