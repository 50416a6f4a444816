"""
Test configuration to keep imports stable without an editable install.

Pytest prepends each test directory to ``sys.path``. We explicitly place the
project root (for ``app.py``) and ``src/`` at the front so imports resolve to
the checked-in source.
"""
from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent

for candidate in (PROJECT_ROOT, PROJECT_ROOT / "src"):
    candidate_str = str(candidate)
    if candidate_str in sys.path:
        sys.path.remove(candidate_str)
    sys.path.insert(0, candidate_str)
