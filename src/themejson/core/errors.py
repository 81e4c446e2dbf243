"""
Error types for theme.json I/O.

The engine itself never raises for bad tree content: unknown keys, bad
shapes and unsafe values are dropped. These errors only cover reading and
writing documents.
"""

from pathlib import Path
from typing import Optional


class ThemeJSONError(Exception):
    """Base exception for all theme.json errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the file path if available."""
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ThemeJSONLoadError(ThemeJSONError):
    """
    Raised when a theme.json document cannot be loaded.

    Examples:
    - File does not exist
    - Invalid JSON or YAML syntax
    - Unsupported file extension
    """

    pass
