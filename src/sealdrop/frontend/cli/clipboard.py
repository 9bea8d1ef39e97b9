"""Clipboard utilities for the CLI frontend.

Uses pyperclip for cross-platform clipboard access.
"""

from __future__ import annotations

import pyperclip


def copy_key_to_clipboard(key: str) -> bool:
    """Copy an exported key to the system clipboard.

    Returns False when no clipboard mechanism is available, so the caller
    can fall back to printing the key only.
    """
    try:
        pyperclip.copy(key)
    except pyperclip.PyperclipException:
        return False
    return True
