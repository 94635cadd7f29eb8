"""Generates the xcconfig of an aggregate target.

The aggregate xcconfig integrates every pod target into the consuming
target: it makes pod headers importable, links the built pod products and
their vendored artifacts, and, for framework integration, sets the
runpath search paths needed to load the embedded frameworks.

Generation order:

    baseline → import visibility → target-specific settings →
    vendored artifacts → link flags → excluded keys → runpaths

Builders return frozen partial tables and the generator merges them in
that order, so the link flags of the pod targets accumulate onto the
baseline linker flags instead of replacing them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from podsettings.models.facts import AggregateTargetFacts
from podsettings.models.platform import IntegrationVariant
from podsettings.runtime.protocols import PublicHeadersStore, TargetSettingsProvider
from podsettings.xcconfig.builders import (
    ImportVisibilityBuilder,
    LinkFlagsBuilder,
    RunpathBuilder,
    SettingsBuilder,
    VendoredArtifactLinker,
)
from podsettings.xcconfig.helper import default_ld_flags, inherited
from podsettings.xcconfig.io import save
from podsettings.xcconfig.table import DEFAULT_OVERWRITE_KEYS, SettingsTable
from podsettings.xcconfig.target_settings import DefaultTargetSettings

logger = logging.getLogger("podsettings.xcconfig.aggregate")

DEFAULT_EXCLUDED_KEYS = ("USE_HEADERMAP",)


class AggregateXCConfig:
    """Generator of the xcconfig for one aggregate target and configuration.

    Attributes:
        target: Facts of the target represented by this xcconfig.
        configuration_name: Build configuration the xcconfig is generated for.
        xcconfig: The last generated table, or None before `generate`.
    """

    def __init__(
        self,
        target: AggregateTargetFacts,
        configuration_name: str = "Release",
        headers_store: Optional[PublicHeadersStore] = None,
        target_settings: Optional[TargetSettingsProvider] = None,
        overwrite_keys: Optional[Iterable[str]] = None,
        excluded_keys: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize the generator.

        Args:
            target: Facts of the consuming target.
            configuration_name: Name of the build configuration.
            headers_store: Public headers store for static integration.
            target_settings: Provider of target-specific settings.
            overwrite_keys: Keys merged with the OVERWRITE policy, in the
                aggregate table and in every partial table.
            excluded_keys: Keys removed after the link flags are merged, in
                addition to USE_HEADERMAP.
        """
        self.target = target
        self.configuration_name = configuration_name
        self.overwrite_keys = frozenset(
            DEFAULT_OVERWRITE_KEYS if overwrite_keys is None else overwrite_keys
        )
        self.target_settings = target_settings or DefaultTargetSettings(self.overwrite_keys)
        # The header map key is always excluded; configured keys come on top.
        self.excluded_keys = tuple(
            dict.fromkeys([*DEFAULT_EXCLUDED_KEYS, *(excluded_keys or ())])
        )
        self.import_visibility = ImportVisibilityBuilder(headers_store, self.overwrite_keys)
        self.vendored = VendoredArtifactLinker(self.overwrite_keys)
        self.link_flags = LinkFlagsBuilder(self.overwrite_keys)
        self.runpath = RunpathBuilder(self.overwrite_keys)
        self.xcconfig: Optional[SettingsTable] = None

    def generate(self) -> SettingsTable:
        """Generate the xcconfig.

        Returns:
            Frozen SettingsTable with the aggregate settings.
        """
        target = self.target
        variant = IntegrationVariant.for_target(target)
        logger.debug(
            "Generating %s (%s) for %s: %s",
            target.name,
            self.configuration_name,
            target.platform.display_name,
            variant,
        )

        xcconfig = SettingsTable(
            {
                "OTHER_LDFLAGS": inherited(default_ld_flags(target)),
                "OTHER_LIBTOOLFLAGS": "$(OTHER_LDFLAGS)",
                "PODS_ROOT": target.relative_pods_root,
                "GCC_PREPROCESSOR_DEFINITIONS": inherited("COCOAPODS=1"),
            },
            overwrite_keys=self.overwrite_keys,
        )

        self._merge_builder(xcconfig, self.import_visibility, variant)

        xcconfig.merge(self.target_settings.settings_for(target))

        self._merge_builder(xcconfig, self.vendored, variant)
        self._merge_builder(xcconfig, self.link_flags, variant)

        # Overrides any project-level value the user may have set.
        for key in self.excluded_keys:
            if xcconfig.remove(key) is not None:
                logger.debug("Removed %s from %s", key, target.name)

        self._merge_builder(xcconfig, self.runpath, variant)

        self.xcconfig = xcconfig.freeze()
        logger.info(
            "Generated %d setting(s) for %s (%s)",
            len(self.xcconfig),
            target.name,
            self.configuration_name,
        )
        return self.xcconfig

    def save_as(self, path: Union[str, Path]) -> Path:
        """Generate the xcconfig and write it to a path.

        Args:
            path: Destination file.

        Returns:
            Path the xcconfig was written to.
        """
        return save(self.generate(), path)

    @property
    def builders(self) -> List[SettingsBuilder]:
        return [self.import_visibility, self.vendored, self.link_flags, self.runpath]

    def _merge_builder(
        self,
        xcconfig: SettingsTable,
        builder: SettingsBuilder,
        variant: IntegrationVariant,
    ) -> None:
        if not builder.applies_to(variant):
            logger.debug("Skipping %s builder for %s", builder.name, self.target.name)
            return
        partial = builder.build(self.target, variant)
        xcconfig.merge(partial)
        logger.debug(
            "Merged %d setting(s) from %s builder", len(partial), builder.name
        )


def generate(
    target: AggregateTargetFacts,
    configuration_name: str = "Release",
    **kwargs,
) -> SettingsTable:
    """Generate the aggregate xcconfig of a target.

    Args:
        target: Facts of the consuming target.
        configuration_name: Name of the build configuration.
        **kwargs: Forwarded to AggregateXCConfig.

    Returns:
        Frozen SettingsTable with the aggregate settings.
    """
    return AggregateXCConfig(target, configuration_name, **kwargs).generate()


__all__ = ["AggregateXCConfig", "DEFAULT_EXCLUDED_KEYS", "generate"]
