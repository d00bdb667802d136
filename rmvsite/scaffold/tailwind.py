"""Patching of the tailwind.config.js generated by ``tailwindcss init``."""
import re
from pathlib import Path
from typing import List

from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger

logger = get_logger(__name__)

CONFIG_NAME = "tailwind.config.js"

# Only empty arrays match, so patching twice changes nothing
EMPTY_CONTENT = re.compile(r"content:\s*\[\s*\]")
EMPTY_PLUGINS = re.compile(r"plugins:\s*\[\s*\]")


def render_content(content_globs: List[str]) -> str:
    entries = ",\n".join(f"    '{glob}'" for glob in content_globs)
    return f"content: [\n{entries}\n  ]"


def render_plugins(plugin: str) -> str:
    return f"plugins: [\n    require('{plugin}'),\n  ]"


def patch_config(text: str, content_globs: List[str], plugin: str) -> str:
    """Fill the empty ``content`` and ``plugins`` arrays of a config."""
    content = render_content(content_globs)
    plugins = render_plugins(plugin)
    text = EMPTY_CONTENT.sub(lambda _: content, text)
    return EMPTY_PLUGINS.sub(lambda _: plugins, text)


def patch_config_file(project_dir: Path, content_globs: List[str], plugin: str) -> bool:
    """Patch tailwind.config.js in place.

    Returns:
        False if the file does not exist, True once it is patched
    """
    path = Path(project_dir) / CONFIG_NAME
    if not path.exists():
        return False

    try:
        original = path.read_text(encoding="utf-8")
        patched = patch_config(original, content_globs, plugin)
        path.write_text(patched, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SetupError(f"Could not update {path}: {e}", step="patch-config") from e

    if patched == original:
        logger.warning(f"{CONFIG_NAME} had no empty content/plugins arrays; left unchanged")
    return True
