"""Git repository management for project setup."""
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger

logger = get_logger(__name__)


class GitManager:
    """Runs the git commands a setup run needs."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    def _run(self, args: List[str], cwd: Optional[Path] = None, step: str = "git") -> str:
        """Run a git command and return its stdout.

        Raises:
            SetupError: If git is missing, times out or exits non-zero
        """
        cmd = ['git'] + args
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise SetupError("Git not found. Please install git first.", step=step) from e
        except subprocess.TimeoutExpired as e:
            raise SetupError(f"'{' '.join(cmd)}' timed out after {self.timeout}s", step=step) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else str(e)
            logger.debug(f"git stderr: {stderr}")
            raise SetupError(f"'{' '.join(cmd)}' failed: {stderr}", step=step) from e

        if result.stdout:
            logger.debug(f"Git output: {result.stdout.strip()}")
        return result.stdout

    def clone(self, url: str, dest: Path) -> None:
        """Clone ``url`` into ``dest``, which must not exist yet."""
        dest = Path(dest)
        if dest.exists():
            raise SetupError(f"Target directory already exists: {dest}", step="clone")

        logger.info(f"Cloning {url}")
        self._run(['clone', url, str(dest)], step="clone")

    def strip_history(self, path: Path) -> None:
        """Remove the .git directory so the template's history is dropped."""
        git_dir = Path(path) / ".git"
        if not git_dir.exists():
            logger.debug(f"No .git directory in {path}")
            return

        try:
            shutil.rmtree(git_dir)
        except OSError as e:
            raise SetupError(f"Could not remove {git_dir}: {e}", step="strip-history") from e

    def init(self, path: Path) -> None:
        """Initialize a fresh repository at ``path``."""
        self._run(['init'], cwd=path, step="init")

    def add_all(self, path: Path) -> None:
        """Stage every file in the working tree."""
        self._run(['add', '.'], cwd=path, step="commit")

    def commit(self, path: Path, message: str) -> None:
        """Commit the staged files."""
        self._run(['commit', '-m', message], cwd=path, step="commit")

    def rename_branch(self, path: Path, branch: str) -> None:
        """Rename the current branch (git branch -M)."""
        self._run(['branch', '-M', branch], cwd=path, step="commit")
