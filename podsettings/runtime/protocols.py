"""
Protocol definitions for generator collaborators.

Protocols describe the external components the aggregate generator
consults, so callers can inject their own sandbox or target-specific
rules without subclassing the defaults.
"""

from typing import List, Mapping, Protocol

from podsettings.models.facts import AggregateTargetFacts
from podsettings.models.platform import Platform


class PublicHeadersStore(Protocol):
    """
    Source of the flattened public header search paths of a sandbox.

    Example:
        paths = store.search_paths(Platform.IOS)
        # ["${PODS_ROOT}/Headers/Public", "${PODS_ROOT}/Headers/Public/Alamofire"]
    """

    def search_paths(self, platform: Platform) -> List[str]:
        """
        Return the public header search paths for a platform.

        Args:
            platform: Platform of the consuming target

        Returns:
            Ordered list of search path strings
        """
        ...


class TargetSettingsProvider(Protocol):
    """
    Source of target-specific settings merged verbatim by the aggregator.
    """

    def settings_for(self, target: AggregateTargetFacts) -> Mapping[str, str]:
        """
        Return the settings specific to an aggregate target.

        Args:
            target: The consuming target

        Returns:
            Mapping of setting names to values
        """
        ...
