"""AES-256-GCM encryption of a whole payload held in memory.

Each call to :func:`encrypt` draws a fresh 96-bit random nonce; no associated
data is used. The AES-GCM call itself runs in a worker thread so callers on
an event loop are not blocked for the duration of a large file.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Callable, Optional, Tuple

from cryptography.exceptions import InvalidTag

from sealdrop.core.exceptions import AuthenticationFailedError
from sealdrop.security.container import NONCE_LENGTH_BYTES
from sealdrop.security.keys import SymmetricKey


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

PROGRESS_STARTED = 50
PROGRESS_DONE = 100


def generate_nonce() -> bytes:
    return os.urandom(NONCE_LENGTH_BYTES)


async def encrypt(
    payload: bytes,
    key: SymmetricKey,
    on_progress: Optional[ProgressCallback] = None,
) -> Tuple[bytes, bytes]:
    """
    Encrypt ``payload`` and return ``(nonce, ciphertext_with_tag)``.

    ``on_progress`` receives 50 right before the cipher runs and 100 right
    after it finishes.
    """
    nonce = generate_nonce()
    aead = key.aead()

    if on_progress is not None:
        on_progress(PROGRESS_STARTED)

    ciphertext = await asyncio.to_thread(aead.encrypt, nonce, payload, None)

    if on_progress is not None:
        on_progress(PROGRESS_DONE)

    logger.debug("encrypted %d payload bytes", len(payload))
    return nonce, ciphertext


async def decrypt(nonce: bytes, ciphertext: bytes, key: SymmetricKey) -> bytes:
    """
    Decrypt and authenticate ``ciphertext``.

    Raises :class:`AuthenticationFailedError` when the tag does not verify,
    which covers a wrong key as well as any modification of the container.
    """
    if len(nonce) != NONCE_LENGTH_BYTES:
        raise ValueError(f"nonce must be {NONCE_LENGTH_BYTES} bytes")

    aead = key.aead()
    try:
        payload = await asyncio.to_thread(aead.decrypt, nonce, ciphertext, None)
    except InvalidTag as exc:
        raise AuthenticationFailedError(
            "authentication failed: wrong key or the container was modified"
        ) from exc

    logger.debug("decrypted %d payload bytes", len(payload))
    return payload
