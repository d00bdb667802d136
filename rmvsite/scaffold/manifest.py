"""Reading and writing the project's package.json."""
import json
from pathlib import Path
from typing import Any, Dict

from rmvsite.core.config import SetupSettings
from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger

logger = get_logger(__name__)

MANIFEST_NAME = "package.json"

SCRIPT_DESCRIPTIONS = {
    "build": "Compile and minify CSS for production.",
    "watch": "Watch for changes and recompile CSS automatically.",
}


def read_manifest(project_dir: Path) -> Dict[str, Any]:
    path = Path(project_dir) / MANIFEST_NAME
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SetupError(f"Could not read {path}: {e}", step="manifest") from e

    if not isinstance(data, dict):
        raise SetupError(f"{path} must contain a JSON object", step="manifest")
    return data


def write_manifest(project_dir: Path, data: Dict[str, Any]) -> None:
    path = Path(project_dir) / MANIFEST_NAME
    try:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise SetupError(f"Could not write {path}: {e}", step="manifest") from e


def ensure_manifest(project_dir: Path, name: str) -> bool:
    """Create a minimal package.json unless one already exists.

    Returns:
        True if a new manifest was written
    """
    if (Path(project_dir) / MANIFEST_NAME).exists():
        logger.debug("package.json already present")
        return False

    logger.info("Creating package.json")
    write_manifest(project_dir, {
        "name": name,
        "version": "1.0.0",
        "private": True,
    })
    return True


def add_scripts(project_dir: Path, scripts: Dict[str, str]) -> Dict[str, Any]:
    """Merge ``scripts`` into the manifest, keeping any existing entries."""
    data = read_manifest(project_dir)
    existing = data.get("scripts") or {}
    if not isinstance(existing, dict):
        raise SetupError("package.json 'scripts' must be an object", step="manifest")

    data["scripts"] = {**existing, **scripts}
    write_manifest(project_dir, data)
    return data


def build_scripts(settings: SetupSettings) -> Dict[str, str]:
    """The build and watch commands for the Tailwind CLI."""
    base = f"npx @tailwindcss/cli -i {settings.css_input} -o {settings.css_output}"
    return {
        "build": f"{base} --minify",
        "watch": f"{base} --watch",
    }
