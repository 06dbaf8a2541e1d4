"""Pytest configuration ensuring the project src directory is importable."""

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cargo_deploy.process.mock import MockRunner  # noqa: E402

BIN_NAME = "blinky"
TARGET_ARCH = "aarch64-unknown-linux-gnu"


def cargo_metadata_json(project: Path, bin_name: str = BIN_NAME) -> str:
    """Return a trimmed ``cargo metadata`` document for a single-binary crate."""
    payload = {
        "packages": [
            {
                "name": bin_name,
                "manifest_path": str(project / "Cargo.toml"),
                "targets": [
                    {"name": bin_name, "kind": ["bin"]},
                ],
            }
        ],
        "target_directory": str(project / "target"),
        "version": 1,
    }
    return json.dumps(payload)


def create_key_files(args: tuple[str, ...]) -> None:
    """Side effect mimicking ``ssh-keygen -f <path>``."""
    key = Path(args[args.index("-f") + 1])
    key.write_text("private\n", encoding="utf-8")
    key.with_name(key.name + ".pub").write_text("ssh-ed25519 AAAA test\n", encoding="utf-8")


def create_artifact(project: Path, profile_dir: str):
    """Side effect writing the binary ``cross build`` would produce."""

    def _effect(args: tuple[str, ...]) -> None:
        artifact = project / "target" / TARGET_ARCH / profile_dir / BIN_NAME
        artifact.parent.mkdir(parents=True, exist_ok=True)
        artifact.write_bytes(b"\x7fELF")

    return _effect


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Provide a Cargo project directory."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "Cargo.toml").write_text(
        f'[package]\nname = "{BIN_NAME}"\nversion = "0.1.0"\n', encoding="utf-8"
    )
    return root


@pytest.fixture
def ssh_dir(tmp_path: Path) -> Path:
    """Provide an isolated stand-in for ``~/.ssh``."""
    return tmp_path / "ssh"


@pytest.fixture
def runner(project: Path) -> MockRunner:
    """Runner where every tool succeeds and ``cross`` produces a release binary."""
    return MockRunner(
        outputs={
            "metadata": cargo_metadata_json(project),
            'printf %s "$HOME"': "/home/pi",
        },
        side_effects={
            "ssh-keygen": create_key_files,
            "--release": create_artifact(project, "release"),
        },
    )
