"""Error type for failed setup steps."""
from typing import Optional


class SetupError(Exception):
    """Raised when any setup step fails.

    Network, file-system and subprocess failures are all reported through
    this one type; the sequencer aborts on the first one it sees.
    """

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step

    def __str__(self) -> str:
        message = super().__str__()
        if self.step:
            return f"{self.step}: {message}"
        return message
