"""Configuration schema definitions using Pydantic for validation.

Controls which build configurations are generated, how repeated keys are
merged and how many targets are generated concurrently. Using Pydantic
ensures configuration errors are caught early with clear error messages.
"""

import re
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from podsettings.xcconfig.aggregate import DEFAULT_EXCLUDED_KEYS
from podsettings.xcconfig.table import DEFAULT_OVERWRITE_KEYS

_SETTING_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GeneratorConfig(BaseModel):
    """Top-level configuration for xcconfig generation.

    Attributes:
        configurations: Build configurations to generate, e.g. Debug and Release.
        overwrite_keys: Setting names merged by overwriting instead of accumulating.
        excluded_keys: Setting names removed from the aggregate xcconfig in
            addition to USE_HEADERMAP, which is always removed.
        max_workers: Maximum number of targets generated concurrently.
    """

    configurations: List[str] = Field(default_factory=lambda: ["Debug", "Release"])
    overwrite_keys: List[str] = Field(
        default_factory=lambda: sorted(DEFAULT_OVERWRITE_KEYS)
    )
    excluded_keys: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_KEYS)
    )
    max_workers: int = Field(default=4, ge=1, le=64)

    model_config = {"extra": "forbid"}

    @field_validator("configurations")
    @classmethod
    def validate_configurations(cls, v: List[str]) -> List[str]:
        """Validate that at least one non-empty configuration is named."""
        if not v:
            raise ValueError("configurations must contain at least one name")
        for name in v:
            if not name or not name.strip():
                raise ValueError(f"Invalid configuration name: {name!r}")
        return v

    @field_validator("overwrite_keys", "excluded_keys")
    @classmethod
    def validate_setting_names(cls, v: List[str]) -> List[str]:
        """Validate that keys are well-formed build setting names."""
        for key in v:
            if not _SETTING_NAME.match(key):
                raise ValueError(f"Invalid build setting name: {key!r}")
        return v

    @staticmethod
    def xcconfig_suffix(configuration_name: str) -> str:
        """File name suffix for a configuration, e.g. 'App Store' -> 'app-store'."""
        return re.sub(r"[^a-z0-9]", "-", configuration_name.lower())

    def xcconfig_filename(self, target_name: str, configuration_name: str) -> str:
        """File name of the xcconfig of a target and configuration."""
        return f"{target_name}.{self.xcconfig_suffix(configuration_name)}.xcconfig"

    def generator_options(self) -> Dict[str, Any]:
        """Keyword arguments forwarded to AggregateXCConfig."""
        return {
            "overwrite_keys": self.overwrite_keys,
            "excluded_keys": self.excluded_keys,
        }

    @classmethod
    def default(cls) -> "GeneratorConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            GeneratorConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary.
        """
        return self.model_dump()
