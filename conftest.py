"""Pytest bootstrap so the src/ package imports without an install."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

EXTRA_PATHS = [
    ROOT / "src",
]

for path in EXTRA_PATHS:
    if path.exists():
        sys.path.insert(0, str(path))
