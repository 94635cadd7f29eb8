"""Base interface for settings builders.

Defines the abstract interface that every aggregate settings builder must
implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional

from podsettings.models.facts import AggregateTargetFacts
from podsettings.models.platform import IntegrationVariant
from podsettings.xcconfig.table import DEFAULT_OVERWRITE_KEYS, SettingsTable


class SettingsBuilder(ABC):
    """Abstract base class for aggregate settings builders.

    Each builder computes one group of related settings (header visibility,
    vendored artifacts, link flags, runpaths) from the target facts and
    returns them as a frozen partial table. Builders never read or mutate
    the aggregate table; merging is left to the aggregator.
    """

    #: Short name used in log messages.
    name: str = "settings"

    def __init__(self, overwrite_keys: Optional[Iterable[str]] = None) -> None:
        """Initialize the builder.

        Args:
            overwrite_keys: Merge policy of the partial tables, normally the
                aggregator's. Defaults to DEFAULT_OVERWRITE_KEYS.
        """
        self.overwrite_keys = frozenset(
            DEFAULT_OVERWRITE_KEYS if overwrite_keys is None else overwrite_keys
        )

    def new_table(self, initial: Optional[Mapping[str, str]] = None) -> SettingsTable:
        """Create an empty partial table with the builder's merge policy."""
        return SettingsTable(initial, overwrite_keys=self.overwrite_keys)

    @abstractmethod
    def build(
        self,
        target: AggregateTargetFacts,
        variant: IntegrationVariant,
    ) -> SettingsTable:
        """Compute the builder's settings.

        Args:
            target: Facts of the consuming target.
            variant: Branching decisions resolved for the target.

        Returns:
            Frozen SettingsTable holding the partial settings.
        """
        raise NotImplementedError

    def applies_to(self, variant: IntegrationVariant) -> bool:
        """Check if the builder contributes settings for a variant.

        Args:
            variant: Branching decisions resolved for the target.

        Returns:
            True if the aggregator should invoke `build`.
        """
        return True
