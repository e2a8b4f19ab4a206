#!/usr/bin/env python3
"""Validate client settings files without requiring an editable install."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running from a checkout, the same way tests/conftest.py does.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from storefront.client.config.validator import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
