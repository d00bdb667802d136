"""Shared test fixtures for create-rmv-site tests."""
import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from rmvsite.core.config import SetupSettings

STOCK_TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
module.exports = {
  content: [],
  theme: {
    extend: {},
  },
  plugins: [],
}
"""


class FakeToolchain:
    """Stands in for git, npm and npx.

    Records every command and simulates the file-system effects the
    setup sequence depends on: clone creates the template with its own
    .git directory, and ``npx @tailwindcss/cli init`` writes a stock
    tailwind.config.js.
    """

    def __init__(self):
        self.calls = []
        self.fail_on = None
        self.write_tailwind_config = True
        # Extra raw files the cloned template ships, relative path -> bytes
        self.template_files = {}

    def run(self, cmd, cwd=None, capture_output=False, text=False, check=False, timeout=None):
        cmd = list(cmd)
        self.calls.append((cmd, cwd))

        if self.fail_on and cmd[:len(self.fail_on)] == self.fail_on:
            raise subprocess.CalledProcessError(128, cmd, output="", stderr="fatal: simulated failure")

        if cmd[:2] == ["git", "clone"]:
            dest = Path(cmd[3])
            (dest / ".git").mkdir(parents=True)
            (dest / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
            (dest / "site" / "templates").mkdir(parents=True)
            (dest / "site" / "templates" / "default.php").write_text("<h1><?= $page->title() ?></h1>\n")
            (dest / "index.php").write_text("<?php\n")
            for relative, content in self.template_files.items():
                (dest / relative).write_bytes(content)
        elif cmd[:2] == ["git", "init"]:
            (Path(cwd) / ".git").mkdir(exist_ok=True)
        elif cmd == ["npx", "@tailwindcss/cli", "init"] and self.write_tailwind_config:
            (Path(cwd) / "tailwind.config.js").write_text(STOCK_TAILWIND_CONFIG)

        return SimpleNamespace(returncode=0, stdout="", stderr="")

    def commands(self):
        return [cmd for cmd, _ in self.calls]


@pytest.fixture
def toolchain(monkeypatch):
    """Patch subprocess.run in the service modules with a FakeToolchain."""
    fake = FakeToolchain()
    monkeypatch.setattr("rmvsite.services.git_manager.subprocess.run", fake.run)
    monkeypatch.setattr("rmvsite.services.npm_manager.subprocess.run", fake.run)
    return fake


@pytest.fixture
def settings():
    """Default settings, unaffected by the developer's environment."""
    return SetupSettings()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep RMV_* variables and real settings files out of the tests."""
    monkeypatch.setattr("rmvsite.core.config.CONFIG_PATHS", [])
    for var in ("RMV_CONFIG", "RMV_TEMPLATE_URL", "RMV_BRANCH", "RMV_COMMAND_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def stock_config():
    """tailwind.config.js as written by ``tailwindcss init``."""
    return STOCK_TAILWIND_CONFIG
