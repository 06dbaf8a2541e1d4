"""Allow ``python -m cargo_deploy``."""

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
