"""Sandbox public headers store.

The sandbox flattens the public headers of every pod into
``<sandbox>/Headers/Public``. Each pod registers one or more
subdirectories, optionally restricted to a platform, and consumers ask
for the search paths that apply to their platform.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from podsettings.models.facts import AggregateTargetFacts, HeaderSearchPathEntry
from podsettings.models.platform import Platform
from podsettings.xcconfig.helper import PODS_ROOT_VAR

logger = logging.getLogger("podsettings.sandbox")


class HeadersStore:
    """Public headers directory of a sandbox."""

    def __init__(
        self,
        relative_path: str = "Headers/Public",
        entries: Optional[Iterable[HeaderSearchPathEntry]] = None,
    ) -> None:
        """Initialize the store.

        Args:
            relative_path: Headers root relative to the sandbox root.
            entries: Registered header directories.
        """
        self.relative_path = relative_path.strip("/")
        self._entries: List[HeaderSearchPathEntry] = list(entries or [])

    @classmethod
    def for_target(cls, target: AggregateTargetFacts) -> "HeadersStore":
        """Build the store from the entries recorded on the target facts."""
        return cls(entries=target.public_header_search_paths)

    @property
    def root(self) -> str:
        return f"{PODS_ROOT_VAR}/{self.relative_path}"

    def add_search_path(self, path: str, platform: Optional[Platform] = None) -> None:
        """Register a header directory, optionally for one platform only."""
        self._entries.append(HeaderSearchPathEntry(path=path, platform=platform))

    def search_paths(self, platform: Platform) -> List[str]:
        """Return the headers root followed by the entries for a platform.

        Duplicates are dropped, keeping the first occurrence.
        """
        paths = [self.root]
        for entry in self._entries:
            if not entry.matches(platform):
                continue
            path = f"{self.root}/{entry.path.strip('/')}"
            if path not in paths:
                paths.append(path)
        logger.debug(
            "Resolved %d public header search path(s) for %s",
            len(paths),
            platform.display_name,
        )
        return paths


__all__ = ["HeadersStore"]
