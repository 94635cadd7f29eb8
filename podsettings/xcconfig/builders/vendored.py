"""Link settings for vendored libraries and frameworks."""

from __future__ import annotations

import logging
from typing import List

from podsettings.models.facts import AggregateTargetFacts, PodTargetFacts
from podsettings.models.platform import IntegrationVariant
from podsettings.xcconfig.builders.base import SettingsBuilder
from podsettings.xcconfig.helper import INHERITED, inherited, quote
from podsettings.xcconfig.table import SettingsTable

log = logging.getLogger("podsettings.xcconfig.builders.vendored")

SEARCH_PATH_KEYS = ("FRAMEWORK_SEARCH_PATHS", "LIBRARY_SEARCH_PATHS")


def links_vendored_artifacts(pod_target: PodTargetFacts) -> bool:
    """Whether the aggregate target must link a pod's vendored artifacts.

    A pod target that builds its own framework already links its vendored
    artifacts into that framework's binary.
    """
    return not (pod_target.should_build and pod_target.requires_frameworks)


class VendoredArtifactLinker(SettingsBuilder):
    """Builder for the settings required by vendored artifacts."""

    name = "vendored"

    def build(
        self,
        target: AggregateTargetFacts,
        variant: IntegrationVariant,
    ) -> SettingsTable:
        settings = self.new_table()
        for pod_target in target.pod_targets:
            if not links_vendored_artifacts(pod_target):
                continue
            for accessor in pod_target.file_accessors:
                settings.merge(
                    accessor.build_settings_for(target.sandbox_root, self.overwrite_keys)
                )
            if pod_target.file_accessors:
                log.debug(
                    "Merged vendored settings of %s (%d accessor(s))",
                    pod_target.name,
                    len(pod_target.file_accessors),
                )

        result = self.new_table()
        for key, value in settings.items():
            if key in SEARCH_PATH_KEYS:
                value = inherited(quote(_search_dirs(settings, key)))
            result.merge({key: value})
        return result.freeze()


def _search_dirs(settings: SettingsTable, key: str) -> List[str]:
    """Distinct directories of a search path value, without the placeholder."""
    return [d for d in dict.fromkeys(settings.tokens(key)) if d != INHERITED]
