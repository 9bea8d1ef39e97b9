"""Key generation and URL-safe serialization for the file codec.

Keys are raw 256-bit AES-GCM keys. The exported form is URL-safe base64
without ``=`` padding, so it can sit in a link fragment or query parameter
without escaping.
"""
from __future__ import annotations

import base64
import binascii
import logging
import os
from dataclasses import dataclass, field

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sealdrop.core.exceptions import CapabilityUnavailableError, MalformedKeyError


logger = logging.getLogger(__name__)

KEY_LENGTH_BYTES = 32

_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


@dataclass(frozen=True)
class SymmetricKey:
    """A 256-bit key bound to AES-GCM."""

    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.material, bytes) or len(self.material) != KEY_LENGTH_BYTES:
            raise MalformedKeyError(
                f"AES-256-GCM requires a {KEY_LENGTH_BYTES}-byte key"
            )

    def aead(self) -> AESGCM:
        return AESGCM(self.material)


def is_supported() -> bool:
    """Return True if AES-256-GCM can be used in this process."""
    try:
        AESGCM(bytes(KEY_LENGTH_BYTES))
    except UnsupportedAlgorithm:
        return False
    return True


def require_supported() -> None:
    if not is_supported():
        raise CapabilityUnavailableError(
            "AES-256-GCM is not available from the cryptography backend"
        )


def generate_key() -> SymmetricKey:
    """Return a fresh random key usable for both encryption and decryption."""
    require_supported()
    return SymmetricKey(os.urandom(KEY_LENGTH_BYTES))


def export_key(key: SymmetricKey) -> str:
    require_supported()
    encoded = base64.urlsafe_b64encode(key.material).decode("ascii")
    return encoded.rstrip("=")


def import_key(key_string: str) -> SymmetricKey:
    """
    Rebuild a key from the string produced by :func:`export_key`.

    Padding is restored before decoding. Anything that is not URL-safe
    base64 of exactly 32 bytes raises :class:`MalformedKeyError`.
    """
    require_supported()
    if not isinstance(key_string, str):
        raise MalformedKeyError("key must be a string")

    standard = key_string.strip().translate(_URLSAFE_TO_STANDARD)
    padded = standard + "=" * (-len(standard) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedKeyError("key is not valid URL-safe base64") from exc

    if len(raw) != KEY_LENGTH_BYTES:
        logger.debug("rejected key of %d bytes", len(raw))
        raise MalformedKeyError(
            f"key decodes to {len(raw)} bytes, expected {KEY_LENGTH_BYTES}"
        )
    return SymmetricKey(raw)
