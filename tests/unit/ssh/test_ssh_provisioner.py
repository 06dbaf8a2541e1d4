"""Tests covering SSH key naming, generation and installation."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from cargo_deploy.process import CommandFailedError, MockRunner, ToolNotFoundError
from cargo_deploy.ssh import ensure_key, key_path_for, sanitize_component
from conftest import create_key_files


def test_key_path_contains_user_and_host_verbatim(ssh_dir: Path) -> None:
    path = key_path_for("pi", "raspberrypi.local", ssh_dir)
    assert path.parent == ssh_dir
    assert "pi" in path.name
    assert "raspberrypi.local" in path.name
    assert path.name == "id_ed25519_pi_raspberrypi.local"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("192.168.1.20", "192.168.1.20"),
        ("fe80::1%eth0", "fe80_1_eth0"),
        ("my host/../x", "my_host_.._x"),
        ("__edge__", "edge"),
    ],
)
def test_sanitize_component(raw: str, expected: str) -> None:
    assert sanitize_component(raw) == expected


def test_missing_key_is_generated_and_installed(ssh_dir: Path) -> None:
    runner = MockRunner(side_effects={"ssh-keygen": create_key_files})
    key = ensure_key(runner, "pi", "raspberrypi.local", ssh_dir=ssh_dir)
    assert key.generated and key.installed
    assert key.private.exists()
    assert key.public.exists()
    assert runner.programs() == ["ssh-keygen", "ssh-copy-id"]
    keygen = runner.calls_to("ssh-keygen")[0]
    assert keygen[keygen.index("-t") + 1] == "ed25519"
    assert keygen[keygen.index("-N") + 1] == ""
    assert "cargo-deploy" in keygen[keygen.index("-C") + 1]
    assert runner.calls_to("ssh-copy-id")[0] == (
        "ssh-copy-id",
        "-i",
        str(key.private),
        "pi@raspberrypi.local",
    )


def test_existing_authorized_key_is_a_no_op(ssh_dir: Path) -> None:
    """A second run must neither regenerate nor reinstall the key."""
    runner = MockRunner(side_effects={"ssh-keygen": create_key_files})
    first = ensure_key(runner, "pi", "raspberrypi.local", ssh_dir=ssh_dir)
    runner.calls.clear()

    second = ensure_key(runner, "pi", "raspberrypi.local", ssh_dir=ssh_dir)
    assert second.private == first.private
    assert not second.generated and not second.installed
    assert runner.calls_to("ssh-keygen") == []
    assert runner.calls_to("ssh-copy-id") == []
    assert sorted(p.name for p in ssh_dir.iterdir()) == [
        "id_ed25519_pi_raspberrypi.local",
        "id_ed25519_pi_raspberrypi.local.pub",
    ]
    check = runner.calls_to("ssh")[0]
    assert "BatchMode=yes" in check


def test_existing_unauthorized_key_is_reinstalled(ssh_dir: Path) -> None:
    ssh_dir.mkdir()
    create_key_files(("ssh-keygen", "-f", str(key_path_for("pi", "pi4", ssh_dir))))
    runner = MockRunner(returncodes={"BatchMode=yes": 255})
    key = ensure_key(runner, "pi", "pi4", ssh_dir=ssh_dir)
    assert key.installed and not key.generated
    assert runner.programs() == ["ssh", "ssh-copy-id"]


def test_keygen_failure_aborts_before_copy(ssh_dir: Path) -> None:
    runner = MockRunner(returncodes={"ssh-keygen": 1})
    with pytest.raises(CommandFailedError, match="SSH key generation failed"):
        ensure_key(runner, "pi", "pi4", ssh_dir=ssh_dir)
    assert runner.calls_to("ssh-copy-id") == []


def test_copy_id_failure_is_fatal(ssh_dir: Path) -> None:
    runner = MockRunner(
        returncodes={"ssh-copy-id": 1},
        side_effects={"ssh-keygen": create_key_files},
    )
    with pytest.raises(CommandFailedError, match="Installing SSH key on pi4 failed"):
        ensure_key(runner, "pi", "pi4", ssh_dir=ssh_dir)


def test_missing_keygen_is_reported(ssh_dir: Path) -> None:
    runner = MockRunner(missing={"ssh-keygen"})
    with pytest.raises(ToolNotFoundError):
        ensure_key(runner, "pi", "pi4", ssh_dir=ssh_dir)


def test_ssh_dir_is_created_private(ssh_dir: Path) -> None:
    runner = MockRunner(side_effects={"ssh-keygen": create_key_files})
    ensure_key(runner, "pi", "pi4", ssh_dir=ssh_dir)
    assert stat.S_IMODE(ssh_dir.stat().st_mode) == 0o700
