"""Test package for draftpool."""

from __future__ import annotations

import sys
from pathlib import Path


# Make ``import draftpool`` work from a plain checkout (no editable install).
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if SRC_ROOT.is_dir() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))
