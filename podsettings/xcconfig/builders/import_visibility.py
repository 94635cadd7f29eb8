"""Header visibility settings for pod targets.

Makes the public headers of every pod target importable from the
consuming target through all include forms:

- ``#import "…"`` via ``-iquote`` or HEADER_SEARCH_PATHS
- ``#import <…>`` via framework discovery or ``-isystem``
- ``@import …`` via FRAMEWORK_SEARCH_PATHS for scoped framework builds
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from podsettings.models.facts import AggregateTargetFacts, PodTargetFacts
from podsettings.models.platform import IntegrationVariant
from podsettings.runtime.protocols import PublicHeadersStore
from podsettings.sandbox import HeadersStore
from podsettings.xcconfig.builders.base import SettingsBuilder
from podsettings.xcconfig.helper import FRAMEWORK_BUILD_PATH_VAR, inherited, quote
from podsettings.xcconfig.table import SettingsTable

log = logging.getLogger("podsettings.xcconfig.builders.import_visibility")


def framework_headers_dir(pod_target: PodTargetFacts) -> str:
    """Headers directory of a framework-packaged pod target."""
    if pod_target.scoped:
        return f"{FRAMEWORK_BUILD_PATH_VAR}/{pod_target.product_name}/Headers"
    return f"{pod_target.product_name}/Headers"


class ImportVisibilityBuilder(SettingsBuilder):
    """Builder for header search settings."""

    name = "import_visibility"

    def __init__(
        self,
        headers_store: Optional[PublicHeadersStore] = None,
        overwrite_keys: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            headers_store: Public headers store used in static mode. When
                omitted, a HeadersStore is built from the target facts.
            overwrite_keys: Merge policy of the partial tables.
        """
        super().__init__(overwrite_keys)
        self.headers_store = headers_store

    def build(
        self,
        target: AggregateTargetFacts,
        variant: IntegrationVariant,
    ) -> SettingsTable:
        if variant.uses_frameworks:
            settings = self._framework_settings(target)
        else:
            settings = self._static_settings(target)
        return settings.freeze()

    def _framework_settings(self, target: AggregateTargetFacts) -> SettingsTable:
        # Framework headers are discoverable by `#import <…>` without search paths.
        header_dirs = [framework_headers_dir(t) for t in target.pod_targets]
        settings = self.new_table(
            {
                "PODS_FRAMEWORK_BUILD_PATH": target.configuration_build_dir,
                "OTHER_CFLAGS": inherited(quote(header_dirs, "-iquote")),
            }
        )
        if any(t.should_build and t.scoped for t in target.pod_targets):
            settings.merge(
                {"FRAMEWORK_SEARCH_PATHS": inherited(f'"{FRAMEWORK_BUILD_PATH_VAR}"')}
            )
        log.debug(
            "Framework header settings for %s (%d header dir(s))",
            target.name,
            len(header_dirs),
        )
        return settings

    def _static_settings(self, target: AggregateTargetFacts) -> SettingsTable:
        store = self.headers_store or HeadersStore.for_target(target)
        search_paths = store.search_paths(target.platform)
        log.debug(
            "Static header settings for %s (%d search path(s))",
            target.name,
            len(search_paths),
        )
        return self.new_table(
            {
                "HEADER_SEARCH_PATHS": inherited(quote(search_paths)),
                "OTHER_CFLAGS": inherited(quote(search_paths, "-isystem")),
            }
        )
