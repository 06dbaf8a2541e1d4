"""Logging configuration helpers."""

from __future__ import annotations

import logging

OPERATOR_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for a CLI run.

    Normal runs print terse operator-facing lines; ``verbose`` switches to
    DEBUG with timestamps and logger names so every external command shows.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=VERBOSE_FORMAT if verbose else OPERATOR_FORMAT,
    )
