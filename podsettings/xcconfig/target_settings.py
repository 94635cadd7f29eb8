"""Default provider of target-specific settings."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from podsettings.models.facts import AggregateTargetFacts
from podsettings.models.platform import Platform
from podsettings.xcconfig.helper import inherited, quote
from podsettings.xcconfig.table import SettingsTable


class DefaultTargetSettings:
    """Code signing and language settings, then the target's own overrides.

    Framework integration on macOS clears CODE_SIGN_IDENTITY. Targets
    using Swift get the COCOAPODS compilation condition.
    """

    def __init__(self, overwrite_keys: Optional[Iterable[str]] = None) -> None:
        self.overwrite_keys = overwrite_keys

    def settings_for(self, target: AggregateTargetFacts) -> Mapping[str, str]:
        settings = SettingsTable(overwrite_keys=self.overwrite_keys)
        if target.requires_frameworks and target.platform is Platform.OSX:
            settings.merge({"CODE_SIGN_IDENTITY": ""})
        if target.uses_swift:
            settings.merge({"OTHER_SWIFT_FLAGS": inherited(quote(["-D", "COCOAPODS"]))})
        settings.merge(target.build_settings)
        return settings.freeze()


__all__ = ["DefaultTargetSettings"]
