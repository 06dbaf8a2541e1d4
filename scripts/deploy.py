#!/usr/bin/env python3
"""Run cargo-deploy from a source checkout without installing it."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure local sources are importable without installation
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from cargo_deploy.cli import main  # noqa: E402

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
