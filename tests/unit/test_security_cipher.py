"""
Unit tests for the AES-256-GCM cipher layer.
"""

import os

import pytest

from sealdrop.core.exceptions import AuthenticationFailedError
from sealdrop.security.cipher import decrypt, encrypt
from sealdrop.security.keys import generate_key


@pytest.mark.asyncio
async def test_encrypt_decrypt_roundtrip():
    key = generate_key()
    payload = os.urandom(4096)

    nonce, ct = await encrypt(payload, key)

    assert len(nonce) == 12
    # GCM appends a 16-byte tag
    assert len(ct) == len(payload) + 16
    assert await decrypt(nonce, ct, key) == payload


@pytest.mark.asyncio
async def test_progress_reports_50_then_100():
    seen = []
    await encrypt(b"payload", generate_key(), on_progress=seen.append)
    assert seen == [50, 100]


@pytest.mark.asyncio
async def test_same_payload_and_key_gives_different_nonces():
    key = generate_key()
    payload = b"same bytes every time"

    first = await encrypt(payload, key)
    second = await encrypt(payload, key)

    assert first[0] != second[0]
    assert first[0] + first[1] != second[0] + second[1]


@pytest.mark.asyncio
async def test_nonces_do_not_repeat():
    key = generate_key()
    nonces = set()
    for _ in range(200):
        nonce, _ = await encrypt(b"x", key)
        assert nonce not in nonces
        nonces.add(nonce)


@pytest.mark.asyncio
async def test_wrong_key_fails_authentication():
    nonce, ct = await encrypt(b"secret", generate_key())
    with pytest.raises(AuthenticationFailedError):
        await decrypt(nonce, ct, generate_key())


@pytest.mark.asyncio
async def test_tampered_nonce_fails_authentication():
    key = generate_key()
    nonce, ct = await encrypt(b"secret", key)
    bad_nonce = bytes([nonce[0] ^ 0x01]) + nonce[1:]
    with pytest.raises(AuthenticationFailedError):
        await decrypt(bad_nonce, ct, key)


@pytest.mark.asyncio
async def test_ciphertext_shorter_than_tag_fails_authentication():
    with pytest.raises(AuthenticationFailedError):
        await decrypt(b"\x00" * 12, b"", generate_key())


@pytest.mark.asyncio
async def test_decrypt_rejects_wrong_nonce_length():
    with pytest.raises(ValueError):
        await decrypt(b"\x00" * 8, b"\x00" * 32, generate_key())
