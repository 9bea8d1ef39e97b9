"""
Data models passed between the codec and its callers
"""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from sealdrop.core.exceptions import MetadataParseError


DEFAULT_CONTENT_TYPE = "application/octet-stream"
FALLBACK_FILE_NAME = "downloaded_file"


@dataclass(frozen=True)
class FileMetadataHeader:
    """Name and content type of the original file, stored inside the payload."""

    original_file_name: str
    original_content_type: str = DEFAULT_CONTENT_TYPE

    def to_dict(self) -> Dict[str, str]:
        # wire field names, in wire order
        return {
            "originalFileName": self.original_file_name,
            "originalContentType": self.original_content_type,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FileMetadataHeader":
        if not isinstance(data, dict):
            raise MetadataParseError("metadata header is not an object")
        name = data.get("originalFileName")
        content_type = data.get("originalContentType")
        if not isinstance(name, str) or not isinstance(content_type, str):
            raise MetadataParseError("metadata header is missing string fields")
        return cls(original_file_name=name, original_content_type=content_type)


FALLBACK_METADATA = FileMetadataHeader(
    original_file_name=FALLBACK_FILE_NAME,
    original_content_type=DEFAULT_CONTENT_TYPE,
)


@dataclass(frozen=True)
class SourceFile:
    """A file held fully in memory, ready to be encrypted."""

    name: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def metadata(self) -> FileMetadataHeader:
        return FileMetadataHeader(
            original_file_name=self.name,
            original_content_type=self.content_type or DEFAULT_CONTENT_TYPE,
        )


@dataclass(frozen=True)
class EncryptedFile:
    container: bytes = field(repr=False)
    key: str = field(repr=False)


@dataclass(frozen=True)
class DecryptedFile:
    data: bytes = field(repr=False)
    metadata: FileMetadataHeader


async def load_source_file(
    path: str | Path, content_type: Optional[str] = None
) -> SourceFile:
    """
    Read ``path`` into a :class:`SourceFile`.

    The read runs in a worker thread so the event loop is not blocked. When
    ``content_type`` is not given it is guessed from the file name, falling
    back to ``application/octet-stream``.
    """
    path = Path(path).expanduser()
    data = await asyncio.to_thread(path.read_bytes)
    if content_type is None:
        guessed, _ = mimetypes.guess_type(path.name)
        content_type = guessed or DEFAULT_CONTENT_TYPE
    return SourceFile(name=path.name, content_type=content_type, data=data)
