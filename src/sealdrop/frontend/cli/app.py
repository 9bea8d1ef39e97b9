"""
Command line entry point for SealDrop.

    sealdrop encrypt report.pdf                 # writes report.pdf.sealed, prints the key
    sealdrop encrypt report.pdf --copy-key      # also copies the key to the clipboard
    sealdrop decrypt report.pdf.sealed KEY      # writes report.pdf into the output dir
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sealdrop.core.exceptions import AuthenticationFailedError, SealDropError
from sealdrop.core.models import FALLBACK_FILE_NAME, load_source_file
from sealdrop.frontend.cli.clipboard import copy_key_to_clipboard
from sealdrop.frontend.cli.context import CliContext, build_context
from sealdrop.frontend.cli.logging_config import configure_logging
from sealdrop.security.encryption import decrypt_file, encrypt_file


logger = logging.getLogger(__name__)


def _log_progress(value: int) -> None:
    logger.info("Encryption progress: %d%%", value)


def safe_output_name(original_file_name: str) -> str:
    # Only the base name is kept; the header is attacker-controlled input.
    name = Path(original_file_name.replace("\\", "/")).name
    if name in ("", ".", "..") or "\x00" in name:
        return FALLBACK_FILE_NAME
    return name


def available_path(directory: Path, name: str) -> Path:
    """Return ``directory / name``, or ``name (1)``, ``name (2)``... if taken."""
    candidate = directory / name
    stem, suffix = Path(name).stem, Path(name).suffix
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem} ({counter}){suffix}"
        counter += 1
    return candidate


async def run_encrypt(args: argparse.Namespace, ctx: CliContext) -> int:
    source_path = Path(args.path).expanduser()
    source = await load_source_file(source_path, content_type=args.content_type)
    result = await encrypt_file(source, on_progress=_log_progress)

    out_path = Path(args.output) if args.output else source_path.with_name(
        source_path.name + ctx.container_suffix
    )
    await asyncio.to_thread(out_path.write_bytes, result.container)
    logger.info("Wrote container to %s", out_path)

    if args.copy_key:
        if copy_key_to_clipboard(result.key):
            logger.info("Key copied to clipboard")
        else:
            logger.warning("Clipboard is not available; copy the key from stdout")

    print(result.key)
    return 0


async def run_decrypt(args: argparse.Namespace, ctx: CliContext) -> int:
    container_path = Path(args.path).expanduser()
    container = await asyncio.to_thread(container_path.read_bytes)
    result = await decrypt_file(container, args.key)

    if args.output:
        out_path = Path(args.output)
    else:
        ctx.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = available_path(
            ctx.output_dir, safe_output_name(result.metadata.original_file_name)
        )
    await asyncio.to_thread(out_path.write_bytes, result.data)

    logger.info(
        "Wrote %s (%s) to %s",
        result.metadata.original_file_name,
        result.metadata.original_content_type,
        out_path,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sealdrop",
        description="Encrypt a file into a self-contained AES-256-GCM container, or decrypt one.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides SEALDROP_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encrypt", help="Encrypt a file under a new key")
    enc.add_argument("path", help="File to encrypt")
    enc.add_argument("-o", "--output", help="Container path (default: PATH + suffix)")
    enc.add_argument("--content-type", default=None, help="Override the guessed content type")
    enc.add_argument(
        "--copy-key", action="store_true", help="Also copy the key to the clipboard"
    )

    dec = sub.add_parser("decrypt", help="Decrypt a container with its key")
    dec.add_argument("path", help="Container to decrypt")
    dec.add_argument("key", help="Key string printed by 'encrypt'")
    dec.add_argument("-o", "--output", help="Output file (default: embedded file name)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return a process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    ctx = build_context()
    configure_logging((args.log_level or ctx.log_level).upper())

    runner = run_encrypt if args.command == "encrypt" else run_decrypt
    try:
        return asyncio.run(runner(args, ctx))
    except AuthenticationFailedError as exc:
        logger.error("Refusing to output data: %s", exc)
        return 1
    except SealDropError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
