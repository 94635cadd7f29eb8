"""Platform, native target kind and integration variant definitions.

The aggregate generator branches on three independent axes: how pod
targets are packaged, which runpath convention the platform follows, and
whether the consuming target is a unit-test bundle. `IntegrationVariant`
resolves all three once per generation so builders dispatch on plain
enum values instead of re-deriving them from the facts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Platform(str, Enum):
    """Supported platforms, keyed by their symbolic name."""

    IOS = "ios"
    OSX = "osx"
    TVOS = "tvos"
    WATCHOS = "watchos"

    @property
    def symbolic_name(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def family(self) -> "PlatformFamily":
        if self is Platform.OSX:
            return PlatformFamily.DESKTOP
        return PlatformFamily.OTHER

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES = {
    Platform.IOS: "iOS",
    Platform.OSX: "macOS",
    Platform.TVOS: "tvOS",
    Platform.WATCHOS: "watchOS",
}


class NativeTargetKind(str, Enum):
    """Product type of the user's native target."""

    APPLICATION = "application"
    FRAMEWORK = "framework"
    STATIC_LIBRARY = "static_library"
    DYNAMIC_LIBRARY = "dynamic_library"
    BUNDLE = "bundle"
    UNIT_TEST_BUNDLE = "unit_test_bundle"
    UI_TEST_BUNDLE = "ui_test_bundle"
    APP_EXTENSION = "app_extension"
    WATCH_APP = "watch_app"
    WATCH_EXTENSION = "watch_extension"

    @property
    def role(self) -> "TargetRole":
        # UI test bundles are hosted like applications; only unit test
        # bundles are loaded from the nested location.
        if self is NativeTargetKind.UNIT_TEST_BUNDLE:
            return TargetRole.TEST_BUNDLE
        return TargetRole.ORDINARY


class Packaging(Enum):
    """How pod targets are packaged into the consuming target."""

    STATIC = "static"
    FRAMEWORK = "framework"


class PlatformFamily(Enum):
    """Runpath convention followed by a platform."""

    DESKTOP = "desktop"
    OTHER = "other"


class TargetRole(Enum):
    """Loading role of the consuming target."""

    ORDINARY = "ordinary"
    TEST_BUNDLE = "test_bundle"


@dataclass(frozen=True)
class IntegrationVariant:
    """Resolved branching decisions for one generation."""

    packaging: Packaging
    platform_family: PlatformFamily
    role: TargetRole

    @classmethod
    def for_target(cls, target) -> "IntegrationVariant":
        """Resolve the variant for an aggregate target.

        Args:
            target: AggregateTargetFacts to inspect.

        Returns:
            IntegrationVariant for the target.
        """
        packaging = Packaging.FRAMEWORK if target.requires_frameworks else Packaging.STATIC
        return cls(
            packaging=packaging,
            platform_family=target.platform.family,
            role=target.native_target_kind.role,
        )

    @property
    def uses_frameworks(self) -> bool:
        return self.packaging is Packaging.FRAMEWORK


__all__ = [
    "IntegrationVariant",
    "NativeTargetKind",
    "Packaging",
    "Platform",
    "PlatformFamily",
    "TargetRole",
]
