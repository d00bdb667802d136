"""Runtime configuration and settings for create-rmv-site."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rmvsite.core.errors import SetupError

DEFAULT_PROJECT_NAME = "my-rmv-project"

# Settings file search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./rmvsite.yml",
    str(Path.home() / ".config" / "rmvsite" / "rmvsite.yml"),
]


class SetupSettings(BaseModel):
    """Everything a setup run needs besides the project name.

    Defaults reproduce the stock Kirby + Tailwind CSS v4 setup; a YAML
    settings file or RMV_* environment variables can override them.
    """

    model_config = ConfigDict(extra='forbid')

    template_url: str = "https://github.com/getkirby/plainkit.git"
    dev_packages: List[str] = Field(
        default_factory=lambda: [
            "tailwindcss@latest",
            "@tailwindcss/cli@latest",
            "@tailwindcss/typography",
            "jquery",
            "@fancyapps/ui",
        ],
        description="Packages installed with npm install --save-dev",
    )
    content_globs: List[str] = Field(
        default_factory=lambda: [
            "./site/**/*.php",
            "./site/**/*.js",
            "./content/**/*.txt",
        ],
        description="Paths Tailwind scans for class names",
    )
    typography_plugin: str = "@tailwindcss/typography"
    css_input: str = "./assets/css/processing.css"
    css_output: str = "./assets/css/tailwind.css"
    commit_message: str = "Initial setup with Kirby, Tailwind CSS v4, jQuery, and Fancybox"
    branch: str = "main"
    command_timeout: int = Field(600, gt=0, description="Seconds before an external command is killed")

    @field_validator('template_url')
    @classmethod
    def validate_template_url(cls, v):
        """Template must be something git can clone."""
        if not v.startswith(('https://', 'http://', 'git@', 'file://', '/')):
            raise ValueError(
                f"Template URL must start with https://, http://, git@, file:// or /. Got: {v}"
            )
        return v

    @field_validator('dev_packages', 'content_globs')
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError("List must contain at least one entry")
        return v

    @field_validator('branch')
    @classmethod
    def validate_branch(cls, v):
        if not v or v.startswith('-') or ' ' in v:
            raise ValueError(f"Invalid branch name: {v!r}")
        return v

    def with_env_overrides(self) -> "SetupSettings":
        """Return a copy with RMV_* environment variables applied.

        Environment variables:
            RMV_TEMPLATE_URL: Git URL of the template repository
            RMV_BRANCH: Branch name for the initial commit
            RMV_COMMAND_TIMEOUT: Per-command timeout in seconds
        """
        overrides = {}
        if template_url := os.getenv("RMV_TEMPLATE_URL"):
            overrides["template_url"] = template_url
        if branch := os.getenv("RMV_BRANCH"):
            overrides["branch"] = branch
        if timeout := os.getenv("RMV_COMMAND_TIMEOUT"):
            overrides["command_timeout"] = timeout

        if not overrides:
            return self

        try:
            return SetupSettings.model_validate({**self.model_dump(), **overrides})
        except ValidationError as e:
            raise SetupError(f"Invalid environment override: {e}", step="settings") from e


@dataclass
class ProjectSpec:
    """The project being created in this run."""

    name: str
    project_dir: Path

    @classmethod
    def from_name(cls, name: str = DEFAULT_PROJECT_NAME, base_dir: Optional[Path] = None) -> "ProjectSpec":
        """Build the spec for ``name``, placed under ``base_dir`` (default: cwd)."""
        if not name or not name.strip():
            raise SetupError("Project name must not be empty", step="settings")
        if name in {".", ".."} or "/" in name or "\\" in name:
            raise SetupError(f"Project name must be a plain directory name, got {name!r}", step="settings")

        base = Path(base_dir) if base_dir else Path.cwd()
        return cls(name=name, project_dir=(base / name).resolve())


def find_settings_file(config_path: Optional[str] = None) -> Optional[Path]:
    """Locate the settings file, if any."""
    if config_path:
        return Path(config_path)

    if env_config := os.environ.get("RMV_CONFIG"):
        return Path(env_config)

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return Path(path)

    return None


def load_settings(config_path: Optional[str] = None) -> SetupSettings:
    """Load settings from defaults, the settings file and the environment.

    Args:
        config_path: Explicit settings file. It must exist when given.

    Raises:
        SetupError: If the file is unreadable or holds invalid settings
    """
    settings_file = find_settings_file(config_path)
    data = {}

    if settings_file is not None:
        if not settings_file.exists():
            raise SetupError(f"Settings file not found: {settings_file}", step="settings")
        try:
            with open(settings_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise SetupError(f"Could not read {settings_file}: {e}", step="settings") from e

        if not isinstance(data, dict):
            raise SetupError(f"{settings_file} must contain a mapping of settings", step="settings")

    try:
        settings = SetupSettings.model_validate(data)
    except ValidationError as e:
        raise SetupError(f"Invalid settings in {settings_file}: {e}", step="settings") from e

    return settings.with_env_overrides()
