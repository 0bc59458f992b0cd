from __future__ import annotations

from pathlib import Path
from typing import Optional


class BuildError(Exception):
    """A build step failed; the message names the offending path when known."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FrontMatterError(BuildError):
    pass
