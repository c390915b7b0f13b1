"""Package-specific exception types."""

from __future__ import annotations


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`trailing_lines_keep_max` must be a non-negative integer")
    """


class InvalidNumberError(ConfigError):
    """Raised when user input for a numeric setting cannot be used.

    Args:
        key: Name of the setting being updated.
        raw_value: Input exactly as the user supplied it.
    """

    def __init__(self, key: str, raw_value: object):
        self.key = key
        self.raw_value = raw_value
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Invalid value for `{self.key}`: {self.raw_value!r} (expected a number)"
