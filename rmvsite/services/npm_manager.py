"""npm and npx invocations for project setup."""
import subprocess
from pathlib import Path
from typing import List, Optional

from rmvsite.core.errors import SetupError
from rmvsite.core.logger import get_logger

logger = get_logger(__name__)


class NpmManager:
    """Runs npm/npx inside the project directory.

    Output is not captured so npm's own progress shows in the terminal.
    """

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    def _run(self, cmd: List[str], cwd: Path, step: str) -> None:
        logger.info(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, cwd=str(cwd), check=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise SetupError(f"{cmd[0]} not found. Please install Node.js and npm first.", step=step) from e
        except subprocess.TimeoutExpired as e:
            raise SetupError(f"'{' '.join(cmd)}' timed out after {self.timeout}s", step=step) from e
        except subprocess.CalledProcessError as e:
            raise SetupError(f"'{' '.join(cmd)}' exited with status {e.returncode}", step=step) from e

    def install(self, path: Path, packages: List[str], dev: bool = True) -> None:
        """Install packages, as devDependencies unless ``dev`` is False."""
        args = ['npm', 'install', *packages]
        if dev:
            args.append('--save-dev')
        self._run(args, cwd=path, step="install")

    def npx(self, path: Path, command: str, args: Optional[List[str]] = None, step: str = "npx") -> None:
        """Run ``npx <command> <args...>``."""
        self._run(['npx', command, *(args or [])], cwd=path, step=step)

    def run_script(self, path: Path, script: str) -> None:
        """Run a manifest script through npx, e.g. ``npx npm run build``."""
        self.npx(path, 'npm', ['run', script], step=script)
