# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path

# Make `import gridnav` / `import env` (src/) and `tests.fakes` / `tools`
# (repo root) importable without an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

for path in (SRC_ROOT, PROJECT_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
