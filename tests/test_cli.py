"""Tests for the create-rmv-site command."""
import json

import pytest

typer = pytest.importorskip("typer")
from typer.testing import CliRunner  # type: ignore

from rmvsite import __version__
from rmvsite.cli import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_default_name(toolchain, workdir):
    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    project_dir = workdir / "my-rmv-project"
    assert project_dir.is_dir()
    assert json.loads((project_dir / "package.json").read_text())["name"] == "my-rmv-project"
    assert "Project setup complete" in result.output


@pytest.mark.parametrize("flag", ["-n", "--name"])
def test_custom_name(toolchain, workdir, flag):
    result = runner.invoke(app, [flag, "foo"])

    assert result.exit_code == 0, result.output
    assert (workdir / "foo").is_dir()
    assert not (workdir / "my-rmv-project").exists()
    scripts = json.loads((workdir / "foo" / "package.json").read_text())["scripts"]
    assert set(scripts) >= {"build", "watch"}


def test_clone_failure_exits_1(toolchain, workdir):
    toolchain.fail_on = ["git", "clone"]

    result = runner.invoke(app, ["-n", "foo"])

    assert result.exit_code == 1
    assert not (workdir / "foo").exists()
    assert "Error:" in result.output


def test_build_failure_cleans_up(toolchain, workdir):
    toolchain.fail_on = ["npx", "npm", "run", "build"]

    result = runner.invoke(app, ["-n", "foo"])

    assert result.exit_code == 1
    assert not (workdir / "foo").exists()


def test_second_run_fails_without_overwriting(toolchain, workdir):
    first = runner.invoke(app, ["-n", "foo"])
    assert first.exit_code == 0, first.output
    marker = workdir / "foo" / "package.json"
    before = marker.read_text()

    second = runner.invoke(app, ["-n", "foo"])

    assert second.exit_code == 1
    assert "already exists" in second.output
    assert marker.read_text() == before


def test_settings_file(toolchain, workdir):
    settings_file = workdir / "custom.yml"
    settings_file.write_text("template_url: https://example.com/starterkit.git\n")

    result = runner.invoke(app, ["-n", "foo", "--config", str(settings_file)])

    assert result.exit_code == 0, result.output
    assert toolchain.commands()[0][2] == "https://example.com/starterkit.git"


def test_invalid_settings_file(toolchain, workdir):
    settings_file = workdir / "custom.yml"
    settings_file.write_text("colour: blue\n")

    result = runner.invoke(app, ["--config", str(settings_file)])

    assert result.exit_code == 1
    assert toolchain.calls == []


def test_invalid_name(toolchain, workdir):
    result = runner.invoke(app, ["-n", "a/b"])

    assert result.exit_code == 1
    assert toolchain.calls == []


def test_log_file(toolchain, workdir):
    log_file = workdir / "logs" / "setup.log"

    result = runner.invoke(app, ["-n", "foo", "--log-file", str(log_file)])

    assert result.exit_code == 0, result.output
    assert "Cloning template" in log_file.read_text()


def test_version(toolchain):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
    assert toolchain.calls == []


def test_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "--name" in result.output


def test_non_utf8_manifest_reports_error(toolchain, workdir):
    toolchain.template_files = {"package.json": b"\xff\xfe{}"}

    result = runner.invoke(app, ["-n", "foo"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error:" in result.output
    assert not (workdir / "foo").exists()
