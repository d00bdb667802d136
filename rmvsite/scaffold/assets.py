"""Generated CSS and JavaScript source files."""
from pathlib import Path
from typing import Dict

from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger
from rmvsite.scaffold.templates import TemplateEngine

logger = get_logger(__name__)

# Template name -> path relative to the project root
ASSET_PATHS: Dict[str, str] = {
    "processing.css": "assets/css/processing.css",
    "main.js": "assets/js/main.js",
}


def write_asset(project_dir: Path, template_name: str, engine: TemplateEngine) -> Path:
    """Render one asset template and write it below the project root."""
    target = Path(project_dir) / ASSET_PATHS[template_name]
    content = engine.render_template(template_name, {})

    logger.info(f"Creating {target.relative_to(project_dir)}")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise SetupError(f"Could not write {target}: {e}", step="assets") from e
    return target


def write_assets(project_dir: Path, engine: TemplateEngine) -> Dict[str, Path]:
    """Write the Tailwind input stylesheet and the jQuery/Fancybox entry script."""
    return {
        name: write_asset(project_dir, name, engine)
        for name in ASSET_PATHS
    }
