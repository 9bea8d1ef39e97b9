"""Runtime settings for the CLI, read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os


DEFAULT_CONTAINER_SUFFIX = ".sealed"


@dataclass
class CliContext:
    """Settings shared by every CLI command."""

    log_level: str = "INFO"
    output_dir: Path = Path(".")
    container_suffix: str = DEFAULT_CONTAINER_SUFFIX


def build_context(environ: Optional[Mapping[str, str]] = None) -> CliContext:
    """
    Build a :class:`CliContext` from environment variables.

    - ``SEALDROP_LOG_LEVEL``: logging level name (default ``INFO``)
    - ``SEALDROP_OUTPUT_DIR``: where decrypted files are written (default cwd)
    - ``SEALDROP_CONTAINER_SUFFIX``: suffix for encrypted output (default ``.sealed``)
    """
    env = os.environ if environ is None else environ

    suffix = env.get("SEALDROP_CONTAINER_SUFFIX") or DEFAULT_CONTAINER_SUFFIX
    if not suffix.startswith("."):
        suffix = "." + suffix

    return CliContext(
        log_level=(env.get("SEALDROP_LOG_LEVEL") or "INFO").upper(),
        output_dir=Path(env.get("SEALDROP_OUTPUT_DIR") or ".").expanduser(),
        container_suffix=suffix,
    )
