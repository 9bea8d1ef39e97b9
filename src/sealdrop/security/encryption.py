"""
Whole-file encryption and decryption.

:func:`encrypt_file` and :func:`decrypt_file` are the entry points the rest
of an application calls. They wire together the three lower layers:

- :mod:`sealdrop.security.keys` for generating, exporting and importing keys
- :mod:`sealdrop.security.container` for the payload and container layouts
- :mod:`sealdrop.security.cipher` for AES-256-GCM

Every call to :func:`encrypt_file` makes a new key and a new nonce. The
result is self-contained: the container plus the exported key string is
all :func:`decrypt_file` needs.
"""

from __future__ import annotations

import logging
from typing import Optional

from sealdrop.core.models import DecryptedFile, EncryptedFile, SourceFile
from sealdrop.security.cipher import ProgressCallback, decrypt, encrypt
from sealdrop.security.container import (
    pack_container,
    pack_payload,
    unpack_container,
    unpack_payload,
)
from sealdrop.security.keys import export_key, generate_key, import_key


logger = logging.getLogger(__name__)


async def encrypt_file(
    file: SourceFile, on_progress: Optional[ProgressCallback] = None
) -> EncryptedFile:
    """
    Encrypt ``file`` under a freshly generated key.

    The metadata header is checked before any cipher work happens, so an
    oversized name fails with :class:`MetadataTooLargeError` without
    reporting progress.
    """
    key = generate_key()
    payload = pack_payload(file.metadata, file.data)
    nonce, ciphertext = await encrypt(payload, key, on_progress)
    container = pack_container(nonce, ciphertext)

    logger.info("Encrypted %s (%d bytes -> %d bytes)", file.name, len(file.data), len(container))
    return EncryptedFile(container=container, key=export_key(key))


async def decrypt_file(container: bytes, key_string: str) -> DecryptedFile:
    """
    Decrypt a container produced by :func:`encrypt_file`.

    Raises :class:`MalformedKeyError`, :class:`TruncatedContainerError` or
    :class:`AuthenticationFailedError`. An unreadable metadata header does
    not fail the call; the fallback header is returned instead.
    """
    key = import_key(key_string)
    nonce, ciphertext = unpack_container(bytes(container))
    payload = await decrypt(nonce, ciphertext, key)
    metadata, file_bytes = unpack_payload(payload)

    logger.info("Decrypted %s (%d bytes)", metadata.original_file_name, len(file_bytes))
    return DecryptedFile(data=file_bytes, metadata=metadata)
