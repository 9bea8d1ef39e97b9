"""Run the sealdrop command line from a source checkout without installing it.

    python main.py encrypt notes.txt
    python main.py decrypt notes.txt.sealed KEY
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sealdrop.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
