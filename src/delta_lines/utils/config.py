from __future__ import annotations

import os
from typing import Final

from .logger import log


class ConfigError(Exception):
    """Configuration validation error."""

    pass


class Config:
    """delta_lines configuration with environment variable support and validation."""

    # Default values
    _DEFAULT_CONTEXT_LINES: Final[int] = 3
    _DEFAULT_COLUMN_WIDTH: Final[int] = 80
    _DEFAULT_MAX_RENDER_LINES: Final[int] = 5000
    _DEFAULT_MAX_INLINE_CHARS: Final[int] = 4000

    # Validation bounds
    _MIN_CONTEXT_LINES: Final[int] = 0
    _MAX_CONTEXT_LINES: Final[int] = 10
    _MIN_COLUMN_WIDTH: Final[int] = 10
    _MAX_COLUMN_WIDTH: Final[int] = 1000
    _MIN_RENDER_LINES: Final[int] = 100
    _MAX_RENDER_LINES: Final[int] = 100000
    _MIN_INLINE_CHARS: Final[int] = 0
    _MAX_INLINE_CHARS: Final[int] = 100000

    def __init__(self):
        """Initialize configuration with environment variable overrides."""
        self.context_lines = self._get_int_env("DELTA_LINES_CONTEXT_LINES", self._DEFAULT_CONTEXT_LINES)
        self.column_width = self._get_int_env("DELTA_LINES_COLUMN_WIDTH", self._DEFAULT_COLUMN_WIDTH)
        self.max_render_lines = self._get_int_env("DELTA_LINES_MAX_RENDER_LINES", self._DEFAULT_MAX_RENDER_LINES)
        self.max_inline_chars = self._get_int_env("DELTA_LINES_MAX_INLINE_CHARS", self._DEFAULT_MAX_INLINE_CHARS)

        self._validate_all()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback to default."""
        value = os.environ.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError as e:
            log.warning(f"[CONFIG] Invalid integer value for {key}='{value}', using default {default}: {e}")
            return default

    def _validate_all(self) -> None:
        """Validate all configuration values."""
        self._validate_int("context_lines", self.context_lines, self._MIN_CONTEXT_LINES, self._MAX_CONTEXT_LINES)
        self._validate_int("column_width", self.column_width, self._MIN_COLUMN_WIDTH, self._MAX_COLUMN_WIDTH)
        self._validate_int("max_render_lines", self.max_render_lines, self._MIN_RENDER_LINES, self._MAX_RENDER_LINES)
        self._validate_int(
            "max_inline_chars", self.max_inline_chars, self._MIN_INLINE_CHARS, self._MAX_INLINE_CHARS
        )

    def _validate_int(self, name: str, value: int, min_val: int, max_val: int) -> None:
        """Validate integer configuration value."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
        if not (min_val <= value <= max_val):
            raise ConfigError(f"{name} must be between {min_val} and {max_val}, got {value}")

    def __repr__(self) -> str:
        return (
            f"Config(context_lines={self.context_lines}, "
            f"column_width={self.column_width}, "
            f"max_render_lines={self.max_render_lines}, "
            f"max_inline_chars={self.max_inline_chars})"
        )


# Global configuration instance
config = Config()
