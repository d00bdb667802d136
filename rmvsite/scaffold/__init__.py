"""Project scaffolding: the setup sequence and the files it generates."""

from .core import SetupSequencer
from .templates import TemplateEngine

__all__ = [
    "SetupSequencer",
    "TemplateEngine",
]
