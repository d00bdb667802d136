"""Unified logging for create-rmv-site with console and file output."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

# Track if file logging has been set up
_file_logging_configured = False


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False):
    """Set up file logging for a setup run.

    Args:
        log_file: Path to log file. Only console logging happens when omitted.
        verbose: Enable debug-level logging

    Note:
        Creates the log directory if it doesn't exist.
    """
    global _file_logging_configured

    root_logger = logging.getLogger("rmvsite")
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if _file_logging_configured or not log_file:
        return

    target_log_file = Path(log_file).expanduser().resolve()
    target_log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Detailed format for file logs
    file_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    _file_logging_configured = True

    root_logger.info(f"Logging to {target_log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    The Rich console handler lives on the ``rmvsite`` root logger so that
    module loggers propagate to it and the level set by
    setup_file_logging() applies everywhere.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger writing through the shared Rich console
    """
    root_logger = logging.getLogger("rmvsite")

    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)

    return logging.getLogger(name)
