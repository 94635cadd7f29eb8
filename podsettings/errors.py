"""Exception types raised by podsettings."""

from typing import Optional


class PodSettingsError(Exception):
    """Base class for podsettings errors."""


class FrozenTableError(PodSettingsError):
    """Raised when a finished settings table is mutated."""

    def __init__(self, operation: str, key: Optional[str] = None):
        target = f" '{key}'" if key is not None else ""
        super().__init__(
            f"Cannot {operation}{target}: settings table is frozen"
        )
        self.operation = operation
        self.key = key


class ConfigLoadError(PodSettingsError):
    """Raised when a configuration or facts source cannot be loaded."""
