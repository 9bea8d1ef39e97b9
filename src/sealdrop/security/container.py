"""Binary layout of the encrypted container and of the plaintext payload.

Container (what gets stored or sent):
- 12 bytes: random nonce
- N bytes: AES-GCM ciphertext with the 16-byte tag appended

Payload (what gets encrypted):
- 100 bytes: metadata header, UTF-8 JSON, zero-padded
- M bytes: original file bytes, verbatim

The format carries no version or algorithm identifier.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Tuple

from sealdrop.core.exceptions import (
    MetadataParseError,
    MetadataTooLargeError,
    TruncatedContainerError,
)
from sealdrop.core.models import FALLBACK_METADATA, FileMetadataHeader


logger = logging.getLogger(__name__)

NONCE_LENGTH_BYTES = 12
METADATA_HEADER_LENGTH_BYTES = 100

# undecodable file names arrive from os.fsdecode as lone surrogates
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def encode_metadata(metadata: FileMetadataHeader) -> bytes:
    """Serialize ``metadata`` to compact UTF-8 JSON (no padding)."""
    text = json.dumps(metadata.to_dict(), ensure_ascii=False, separators=(",", ":"))
    return _LONE_SURROGATE.sub("\ufffd", text).encode("utf-8")


def decode_metadata(region: bytes) -> FileMetadataHeader:
    """
    Parse a metadata region, ignoring its trailing zero padding.

    Raises :class:`MetadataParseError` for anything that is not a UTF-8 JSON
    object with string ``originalFileName`` and ``originalContentType``.
    """
    raw = region.rstrip(b"\x00")
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MetadataParseError(f"metadata header is not valid JSON: {exc}") from exc
    return FileMetadataHeader.from_dict(data)


def pack_payload(metadata: FileMetadataHeader, file_bytes: bytes) -> bytes:
    encoded = encode_metadata(metadata)
    if len(encoded) > METADATA_HEADER_LENGTH_BYTES:
        raise MetadataTooLargeError(
            f"metadata header is {len(encoded)} bytes, "
            f"limit is {METADATA_HEADER_LENGTH_BYTES}"
        )
    header = encoded.ljust(METADATA_HEADER_LENGTH_BYTES, b"\x00")
    return header + bytes(file_bytes)


def unpack_payload(payload: bytes) -> Tuple[FileMetadataHeader, bytes]:
    """
    Split a decrypted payload into ``(metadata, file_bytes)``.

    A header that cannot be parsed is replaced by the fallback record
    (``downloaded_file`` / ``application/octet-stream``); the file bytes are
    still returned.
    """
    region = payload[:METADATA_HEADER_LENGTH_BYTES]
    file_bytes = payload[METADATA_HEADER_LENGTH_BYTES:]
    try:
        metadata = decode_metadata(region)
    except MetadataParseError as exc:
        logger.warning("Failed to parse embedded metadata, using fallback: %s", exc)
        metadata = FALLBACK_METADATA
    return metadata, file_bytes


def pack_container(nonce: bytes, ciphertext: bytes) -> bytes:
    if len(nonce) != NONCE_LENGTH_BYTES:
        raise ValueError(f"nonce must be {NONCE_LENGTH_BYTES} bytes")
    return nonce + ciphertext


def unpack_container(container: bytes) -> Tuple[bytes, bytes]:
    """Split a container into ``(nonce, ciphertext)``."""
    if len(container) < NONCE_LENGTH_BYTES:
        raise TruncatedContainerError(
            f"container is {len(container)} bytes, too short to contain a nonce"
        )
    return container[:NONCE_LENGTH_BYTES], container[NONCE_LENGTH_BYTES:]
