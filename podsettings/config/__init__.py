"""Configuration schema and validation for podsettings."""

from .schema import GeneratorConfig

__all__ = [
    "GeneratorConfig",
]
