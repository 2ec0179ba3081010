from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root takes precedence over any globally-installed copy.
ROOT = Path(__file__).resolve().parents[1]

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)
