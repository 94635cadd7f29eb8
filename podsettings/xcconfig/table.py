"""Ordered build settings table with explicit merge semantics.

A SettingsTable maps build setting names to string values and keeps the
insertion order of first-seen keys so serialized output is reproducible.
Merging is policy driven: flag-like keys accumulate (the existing and the
incoming value are joined by a single space) while scalar keys such as
PODS_ROOT are overwritten.
"""

from __future__ import annotations

import logging
import shlex
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from podsettings.errors import FrozenTableError

logger = logging.getLogger("podsettings.xcconfig.table")


class MergePolicy(Enum):
    """How a key already present in the table combines with a new value."""

    ACCUMULATE = "accumulate"
    OVERWRITE = "overwrite"


DEFAULT_OVERWRITE_KEYS = frozenset(
    {
        "PODS_ROOT",
        "PODS_FRAMEWORK_BUILD_PATH",
        "OTHER_LIBTOOLFLAGS",
        "CODE_SIGN_IDENTITY",
    }
)


class SettingsTable(Mapping[str, str]):
    """Insertion-ordered mapping of build setting names to values.

    The table is mutable only through `merge` and `remove` until `freeze`
    is called; afterwards both raise FrozenTableError.
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, str]] = None,
        overwrite_keys: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize the table.

        Args:
            initial: Settings merged into the empty table.
            overwrite_keys: Keys merged with the OVERWRITE policy. Defaults
                to DEFAULT_OVERWRITE_KEYS.
        """
        self._values: Dict[str, str] = {}
        self._overwrite_keys = frozenset(
            DEFAULT_OVERWRITE_KEYS if overwrite_keys is None else overwrite_keys
        )
        self._frozen = False
        if initial:
            self.merge(initial)

    # Mapping protocol

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SettingsTable):
            return list(self._values.items()) == list(other._values.items())
        if isinstance(other, Mapping):
            return list(self._values.items()) == list(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"SettingsTable({self._values!r}, {state})"

    # Merge contract

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def overwrite_keys(self) -> frozenset:
        return self._overwrite_keys

    def policy_for(self, key: str) -> MergePolicy:
        """Return the merge policy applied to a key."""
        if key in self._overwrite_keys:
            return MergePolicy.OVERWRITE
        return MergePolicy.ACCUMULATE

    def merge(self, incoming: Mapping[str, str]) -> "SettingsTable":
        """Merge settings into the table.

        Absent keys are inserted. Present keys either accumulate
        (``existing + " " + incoming``) or are overwritten, according to
        `policy_for`. Values are stripped; an empty incoming value leaves
        an existing entry untouched.

        Args:
            incoming: Settings to merge, applied in iteration order.

        Returns:
            The table itself.

        Raises:
            FrozenTableError: If the table has been frozen.
        """
        if self._frozen:
            raise FrozenTableError("merge", next(iter(incoming), None))
        for key, raw_value in incoming.items():
            value = str(raw_value).strip()
            existing = self._values.get(key)
            if existing is None:
                self._values[key] = value
            elif not value:
                continue
            elif self.policy_for(key) is MergePolicy.OVERWRITE or not existing:
                if existing and existing != value:
                    logger.debug("Overwriting %s: %r -> %r", key, existing, value)
                self._values[key] = value
            else:
                self._values[key] = f"{existing} {value}"
        return self

    def remove(self, key: str) -> Optional[str]:
        """Delete a key outright, regardless of earlier merges.

        Returns:
            The removed value, or None if the key was absent.

        Raises:
            FrozenTableError: If the table has been frozen.
        """
        if self._frozen:
            raise FrozenTableError("remove", key)
        return self._values.pop(key, None)

    def freeze(self) -> "SettingsTable":
        """Make the table read-only and return it."""
        self._frozen = True
        return self

    # Helpers

    def copy(self) -> "SettingsTable":
        """Return an unfrozen copy with the same values and policy."""
        clone = SettingsTable(overwrite_keys=self._overwrite_keys)
        clone._values = dict(self._values)
        return clone

    def tokens(self, key: str) -> List[str]:
        """Split a value into shell words, or [] when the key is absent."""
        value = self._values.get(key)
        if not value:
            return []
        return shlex.split(value)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)


__all__ = ["DEFAULT_OVERWRITE_KEYS", "MergePolicy", "SettingsTable"]
