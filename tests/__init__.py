"""Cross-module tests for the ESMS registers.

The repository root is put on ``sys.path`` so ``import esms`` works when the
suite runs from a checkout without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))
