"""Exceptions for configuration and data loading problems."""

from pathlib import Path
from typing import Any, Optional, Union


class WxExplainError(Exception):
    """Base exception for the package."""


class LexiconLoadError(WxExplainError):
    """Exception raised when a lexicon or locale file cannot be loaded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, details: Any = None):
        """
        Initialize load error.

        Args:
            message: Error message
            path: File that failed to load
            details: Optional underlying error
        """
        super().__init__(message)
        self.path = path
        self.details = details

    def __str__(self) -> str:
        if self.path:
            return f"{super().__str__()} ({self.path})"
        return super().__str__()
