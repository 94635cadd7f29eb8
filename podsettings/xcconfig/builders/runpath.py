"""Runpath search paths for framework integration.

Adds the default dynamic loader search paths, which may be missing from
older project templates or removed when dependencies used to be linked
statically, so that embedded frameworks are found at load time.
"""

from __future__ import annotations

from typing import List

from podsettings.models.facts import AggregateTargetFacts
from podsettings.models.platform import IntegrationVariant, PlatformFamily, TargetRole
from podsettings.xcconfig.builders.base import SettingsBuilder
from podsettings.xcconfig.helper import INHERITED
from podsettings.xcconfig.table import SettingsTable


def runpath_search_paths(variant: IntegrationVariant) -> List[str]:
    """Return the runpath entries for a variant, inherited placeholder first."""
    if variant.platform_family is PlatformFamily.DESKTOP:
        # Test bundles live one level deeper inside the host's Contents.
        if variant.role is TargetRole.TEST_BUNDLE:
            loader_path = "'@loader_path/../Frameworks'"
        else:
            loader_path = "'@loader_path/Frameworks'"
        return [INHERITED, "'@executable_path/../Frameworks'", loader_path]
    return [INHERITED, "'@executable_path/Frameworks'", "'@loader_path/Frameworks'"]


class RunpathBuilder(SettingsBuilder):
    """Builder for LD_RUNPATH_SEARCH_PATHS."""

    name = "runpath"

    def applies_to(self, variant: IntegrationVariant) -> bool:
        return variant.uses_frameworks

    def build(
        self,
        target: AggregateTargetFacts,
        variant: IntegrationVariant,
    ) -> SettingsTable:
        paths = runpath_search_paths(variant)
        return self.new_table({"LD_RUNPATH_SEARCH_PATHS": " ".join(paths)}).freeze()
