"""Linker flags naming every pod target built for the aggregate target."""

from __future__ import annotations

from typing import List

from podsettings.models.facts import AggregateTargetFacts, PodTargetFacts
from podsettings.models.platform import IntegrationVariant
from podsettings.xcconfig.builders.base import SettingsBuilder
from podsettings.xcconfig.table import SettingsTable


def link_flag(pod_target: PodTargetFacts) -> str:
    if pod_target.requires_frameworks:
        return f'-framework "{pod_target.product_basename}"'
    return f'-l "{pod_target.product_basename}"'


class LinkFlagsBuilder(SettingsBuilder):
    """Builder for OTHER_LDFLAGS of the built pod targets.

    Pod targets with should_build=False are skipped; their artifacts are
    embedded in a pod target that is linked.
    """

    name = "link_flags"

    def build(
        self,
        target: AggregateTargetFacts,
        variant: IntegrationVariant,
    ) -> SettingsTable:
        flags: List[str] = [
            link_flag(pod_target)
            for pod_target in target.pod_targets
            if pod_target.should_build
        ]
        return self.new_table({"OTHER_LDFLAGS": " ".join(flags)}).freeze()
