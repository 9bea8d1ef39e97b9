"""Security helpers: single-shot AES-256-GCM file encryption for SealDrop.

This package provides:
- 256-bit key generation and URL-safe key strings
- the nonce + ciphertext container and the fixed 100-byte metadata header
- async whole-file encrypt/decrypt with a coarse progress callback

Files are held fully in memory; there is no streaming mode.
"""

from .keys import (
    SymmetricKey,
    is_supported,
    require_supported,
    generate_key,
    export_key,
    import_key,
)
from .container import pack_payload, unpack_payload, pack_container, unpack_container
from .cipher import encrypt, decrypt
from .encryption import encrypt_file, decrypt_file

__all__ = [
    "SymmetricKey",
    "is_supported",
    "require_supported",
    "generate_key",
    "export_key",
    "import_key",
    "pack_payload",
    "unpack_payload",
    "pack_container",
    "unpack_container",
    "encrypt",
    "decrypt",
    "encrypt_file",
    "decrypt_file",
]
