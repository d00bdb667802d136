"""The setup sequence that turns a template clone into a ready project."""
import os
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Optional

from rmvsite.core.config import ProjectSpec, SetupSettings
from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger
from rmvsite.scaffold import manifest, tailwind
from rmvsite.scaffold.assets import write_assets
from rmvsite.scaffold.templates import TemplateEngine
from rmvsite.services.git_manager import GitManager
from rmvsite.services.npm_manager import NpmManager

logger = get_logger(__name__)


@contextmanager
def working_directory(path: Path):
    """Change into ``path`` for the duration of the block.

    The previous working directory is restored on every exit path.
    """
    original = Path.cwd()
    os.chdir(path)
    logger.debug(f"Changed directory to: {path}")
    try:
        yield Path(path)
    finally:
        os.chdir(original)
        logger.debug(f"Changed directory back to: {original}")


class SetupSequencer:
    """Runs the fixed list of setup steps for one project.

    Steps run in order and the first failure aborts the run. A target
    directory created by the run is removed again when the run fails.
    """

    def __init__(
        self,
        settings: Optional[SetupSettings] = None,
        git: Optional[GitManager] = None,
        npm: Optional[NpmManager] = None,
        engine: Optional[TemplateEngine] = None,
    ):
        self.settings = settings or SetupSettings()
        self.git = git or GitManager(timeout=self.settings.command_timeout)
        self.npm = npm or NpmManager(timeout=self.settings.command_timeout)
        self.engine = engine or TemplateEngine()

    def run(self, project: ProjectSpec) -> Path:
        """Create the project described by ``project``.

        Returns:
            Path to the finished project directory

        Raises:
            SetupError: On the first failing step, after cleanup
        """
        project_dir = project.project_dir
        logger.info(f"Setting up Kirby project: {project.name} in {project_dir}")

        # Never clean up a directory this run did not create
        if project_dir.exists():
            raise SetupError(f"Target directory already exists: {project_dir}", step="clone")

        try:
            self._run_steps(project)
        except BaseException:
            self._cleanup(project_dir)
            raise

        return project_dir

    def _run_steps(self, project: ProjectSpec) -> None:
        settings = self.settings
        project_dir = project.project_dir

        self._step("Cloning template", self.git.clone, settings.template_url, project_dir)
        self._step("Removing template .git directory", self.git.strip_history, project_dir)
        self._step("Initializing new git repository", self.git.init, project_dir)
        self._step("Ensuring package.json", manifest.ensure_manifest, project_dir, project.name)

        with working_directory(project_dir):
            self._step("Installing npm dependencies", self.npm.install, project_dir, settings.dev_packages)
            self._step(
                "Initializing Tailwind CSS configuration",
                self.npm.npx, project_dir, "@tailwindcss/cli", ["init"], "tailwind-init",
            )
            self._step("Writing asset files", write_assets, project_dir, self.engine)

            patched = self._step(
                "Updating Tailwind config",
                tailwind.patch_config_file, project_dir, settings.content_globs, settings.typography_plugin,
            )
            if not patched:
                logger.warning(f"{tailwind.CONFIG_NAME} not found after init. Skipping update.")

            self._step(
                "Updating package.json scripts",
                manifest.add_scripts, project_dir, manifest.build_scripts(settings),
            )
            self._step("Running initial Tailwind build", self.npm.run_script, project_dir, "build")

            self._step("Staging files", self.git.add_all, project_dir)
            self._step("Committing", self.git.commit, project_dir, settings.commit_message)
            self._step(f"Renaming branch to {settings.branch}", self.git.rename_branch, project_dir, settings.branch)

    def _step(self, description: str, action: Callable[..., Any], *args: Any) -> Any:
        logger.info(f"{description}...")
        try:
            result = action(*args)
        except SetupError:
            raise
        except Exception as e:
            logger.debug(f"{description} raised {type(e).__name__}", exc_info=True)
            raise SetupError(str(e), step=description) from e
        logger.info(f"✓ {description}")
        return result

    def _cleanup(self, project_dir: Path) -> None:
        """Best-effort removal of a partially created project."""
        if not project_dir.exists():
            return

        logger.warning(f"Attempting to clean up {project_dir}...")
        try:
            shutil.rmtree(project_dir)
        except OSError as e:
            logger.error(f"Failed to remove {project_dir}: {e}")
            return
        logger.warning(f"Directory {project_dir} removed.")

    def summary(self, project: ProjectSpec) -> str:
        """Closing instructions for a finished project."""
        return self.engine.render_template("summary", {
            "name": project.name,
            "project_dir": project.project_dir,
            "scripts": manifest.SCRIPT_DESCRIPTIONS,
            "css_output": self.settings.css_output.removeprefix("./"),
        })
