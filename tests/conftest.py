"""Make the in-tree ``ddir`` package importable when pytest runs uninstalled.

Tests live under ``tests/unit/<area>/`` without ``__init__.py`` files, so
pytest's rootdir insertion only covers each test directory.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parents[1])

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
