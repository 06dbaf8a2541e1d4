"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cargo_deploy.cli import (
    EXIT_CONFIG_CREATED,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_OK,
    main,
    parse_args,
)
from cargo_deploy.config import SUPPORTED_ARCH, save_config
from cargo_deploy.config.models import DeployConfig
from cargo_deploy.process import MockRunner
from conftest import TARGET_ARCH, create_artifact


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.debug is False
    assert args.config is None
    assert args.project_dir == Path(".")


def test_first_run_exits_for_edit(project: Path) -> None:
    runner = MockRunner()
    code = main(["--project-dir", str(project)], runner=runner)
    assert code == EXIT_CONFIG_CREATED
    written = json.loads((project / "cargo_deploy.json").read_text(encoding="utf-8"))
    assert written["target_arch"] == SUPPORTED_ARCH
    assert runner.calls == []


def test_invalid_config_exits_nonzero(project: Path) -> None:
    (project / "cargo_deploy.json").write_text("{", encoding="utf-8")
    assert main(["--project-dir", str(project)], runner=MockRunner()) == EXIT_FAILURE


def test_successful_debug_run(project: Path, runner: MockRunner, _isolated_home: Path) -> None:
    save_config(
        project / "cargo_deploy.json",
        DeployConfig(target_name="raspberrypi.local", target_user="pi"),
    )
    runner.side_effects["cross"] = create_artifact(project, "debug")
    code = main(["--debug", "--project-dir", str(project)], runner=runner)
    assert code == EXIT_OK
    key = _isolated_home / ".ssh" / "id_ed25519_pi_raspberrypi.local"
    assert key.exists()
    scp = runner.calls_to("scp")[0]
    assert str(project / "target" / TARGET_ARCH / "debug" / "blinky") in scp


def test_tool_failure_exits_nonzero(project: Path, runner: MockRunner) -> None:
    config_path = project / "custom.json"
    save_config(config_path, DeployConfig(target_name="pi4", target_user="pi"))
    runner.returncodes["ssh-copy-id"] = 1
    code = main(["--project-dir", str(project), "--config", str(config_path)], runner=runner)
    assert code == EXIT_FAILURE
    assert runner.calls_to("cross") == []


def test_interrupt_exits_130(project: Path, runner: MockRunner) -> None:
    save_config(project / "cargo_deploy.json", DeployConfig(target_name="pi4", target_user="pi"))

    def _interrupt(args: tuple[str, ...]) -> None:
        raise KeyboardInterrupt

    runner.side_effects["ssh-keygen"] = _interrupt
    code = main(["--project-dir", str(project)], runner=runner)
    assert code == EXIT_INTERRUPTED
    assert runner.calls_to("cross") == []


def test_module_entry_point_is_importable() -> None:
    """``python -m cargo_deploy`` resolves to the same ``main``."""
    import cargo_deploy.__main__ as entry

    assert entry.__doc__
    assert entry.main is main
