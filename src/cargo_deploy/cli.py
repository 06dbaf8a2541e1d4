"""Command line entry point: build for the target device and deploy."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from . import __version__
from .build.cross import BuildProfile
from .config.models import CONFIG_FILENAME, ConfigCreated, ConfigError
from .pipelines.deploy import run_deploy
from .process.base import CommandError, CommandFailedError, CommandRunner
from .process.subprocess_runner import SubprocessRunner
from .utils.logging import configure_logging

LOGGER = logging.getLogger("cargo_deploy.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_CREATED = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="cargo-deploy",
        description="Cross compile the current Cargo project and deploy it to a remote ARM64 device",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Build in debug mode (release is the default)",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path("."),
        help="Directory containing Cargo.toml",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to the deploy config (default: <project-dir>/{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging, including every external command",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None, runner: CommandRunner | None = None) -> int:
    """Entry point for the deploy CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    project_dir = args.project_dir.expanduser().resolve()
    config_path = (args.config or project_dir / CONFIG_FILENAME).expanduser()

    try:
        run_deploy(
            config_path,
            BuildProfile.from_flag(args.debug),
            runner=runner or SubprocessRunner(),
            project_dir=project_dir,
        )
    except ConfigCreated as exc:
        LOGGER.warning("%s", exc)
        return EXIT_CONFIG_CREATED
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        return EXIT_FAILURE
    except CommandFailedError as exc:
        LOGGER.error("%s", exc)
        if exc.output:
            LOGGER.error("%s", exc.output)
        return EXIT_FAILURE
    except CommandError as exc:
        LOGGER.error("%s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        LOGGER.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception:
        LOGGER.exception("Deployment terminated with an unexpected error")
        return EXIT_FAILURE
    return EXIT_OK
