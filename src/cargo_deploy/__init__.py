"""Cross-compile a Rust binary and deploy it to a remote ARM64 device."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cargo-deploy")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

PACKAGE_NAME = "cargo-deploy"

__all__ = ["PACKAGE_NAME", "__version__"]
