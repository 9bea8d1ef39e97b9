"""
Unit tests for key generation, export and import.
"""

import base64

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

import sealdrop.security.keys as keys_mod
from sealdrop.core.exceptions import CapabilityUnavailableError, MalformedKeyError
from sealdrop.security.keys import (
    KEY_LENGTH_BYTES,
    SymmetricKey,
    export_key,
    generate_key,
    import_key,
    is_supported,
)


def test_generate_key_is_256_bits():
    key = generate_key()
    assert len(key.material) == KEY_LENGTH_BYTES


def test_generate_key_is_fresh_each_time():
    assert generate_key().material != generate_key().material


def test_export_key_is_url_safe_without_padding():
    for _ in range(50):
        exported = export_key(generate_key())
        assert "=" not in exported
        assert "+" not in exported
        assert "/" not in exported
        # 32 bytes -> 43 base64 characters once the single pad char is dropped
        assert len(exported) == 43


def test_export_key_matches_standard_base64_with_substitutions():
    key = SymmetricKey(bytes(range(250, 256)) + bytes(26))
    expected = (
        base64.b64encode(key.material).decode()
        .replace("+", "-")
        .replace("/", "_")
        .rstrip("=")
    )
    assert export_key(key) == expected


def test_import_export_roundtrip():
    key = generate_key()
    assert import_key(export_key(key)) == key


def test_import_key_accepts_padded_input():
    key = generate_key()
    padded = base64.urlsafe_b64encode(key.material).decode()
    assert padded.endswith("=")
    assert import_key(padded) == key


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "not a key!",
        "A",
        base64.urlsafe_b64encode(b"\x01" * 16).decode().rstrip("="),
        base64.urlsafe_b64encode(b"\x01" * 33).decode().rstrip("="),
        "ключ",
    ],
)
def test_import_key_rejects_malformed(bad):
    with pytest.raises(MalformedKeyError):
        import_key(bad)


def test_import_key_rejects_non_string():
    with pytest.raises(MalformedKeyError):
        import_key(b"bytes are not a key string")


def test_symmetric_key_rejects_wrong_length():
    with pytest.raises(MalformedKeyError):
        SymmetricKey(b"\x00" * 16)


def test_symmetric_key_repr_hides_material():
    key = SymmetricKey(b"\xab" * 32)
    assert "abab" not in repr(key).lower()
    assert "material" not in repr(key)


def test_is_supported_true_with_default_backend():
    assert is_supported() is True


def test_capability_unavailable(monkeypatch):
    def _unsupported(_key):
        raise UnsupportedAlgorithm("AES-GCM disabled")

    monkeypatch.setattr(keys_mod, "AESGCM", _unsupported)

    assert is_supported() is False
    with pytest.raises(CapabilityUnavailableError):
        generate_key()
    with pytest.raises(CapabilityUnavailableError):
        export_key(SymmetricKey(b"\x00" * 32))
    with pytest.raises(CapabilityUnavailableError):
        import_key("A" * 43)
