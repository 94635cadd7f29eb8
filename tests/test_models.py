"""Tests for facts validation and platform variants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from podsettings.models.facts import AggregateTargetFacts, FileAccessor
from podsettings.models.platform import (
    IntegrationVariant,
    NativeTargetKind,
    Packaging,
    Platform,
    PlatformFamily,
    TargetRole,
)
from podsettings.sandbox import HeadersStore
from tests.factories import make_pod


def test_platform_families() -> None:
    """Only macOS uses the desktop runpath convention."""
    assert Platform.OSX.family is PlatformFamily.DESKTOP
    for platform in (Platform.IOS, Platform.TVOS, Platform.WATCHOS):
        assert platform.family is PlatformFamily.OTHER
    assert Platform("osx").symbolic_name == "osx"
    assert str(Platform.IOS) == "iOS"


def test_only_unit_test_bundles_are_test_bundles() -> None:
    """UI test bundles load like ordinary targets."""
    assert NativeTargetKind.UNIT_TEST_BUNDLE.role is TargetRole.TEST_BUNDLE
    assert NativeTargetKind.UI_TEST_BUNDLE.role is TargetRole.ORDINARY
    assert NativeTargetKind.APPLICATION.role is TargetRole.ORDINARY


def test_variant_for_target(target_factory) -> None:
    """The variant captures packaging, platform family and role at once."""
    target = target_factory(
        platform="osx", requires_frameworks=True, native_target_kind="unit_test_bundle"
    )

    variant = IntegrationVariant.for_target(target)

    assert variant == IntegrationVariant(
        Packaging.FRAMEWORK, PlatformFamily.DESKTOP, TargetRole.TEST_BUNDLE
    )
    assert variant.uses_frameworks


@pytest.mark.parametrize(
    "overrides",
    [
        {"product_basename": ""},
        {"product_basename": "   "},
        {"product_name": 'Bad"Name.framework'},
    ],
)
def test_pod_target_rejects_unusable_product_names(overrides) -> None:
    """Names that cannot be quoted into linker flags fail validation."""
    with pytest.raises(ValidationError):
        make_pod("A", **overrides)


def test_aggregate_rejects_duplicate_pod_targets(target_factory) -> None:
    """Pod target names must be unique."""
    with pytest.raises(ValidationError, match="Duplicate pod target"):
        target_factory(pod_targets=[make_pod("A"), make_pod("A")])


def test_aggregate_rejects_unknown_platform(target_factory) -> None:
    """Unsupported platforms fail validation."""
    with pytest.raises(ValidationError):
        target_factory(platform="android")


def test_relative_pods_root(target_factory) -> None:
    """PODS_ROOT is relative to the client root unless given explicitly."""
    assert target_factory().relative_pods_root == "${SRCROOT}/Pods"
    nested = target_factory(sandbox_root="/work/Pods", client_root="/work/App")
    assert nested.relative_pods_root == "${SRCROOT}/../Pods"
    explicit = target_factory(pods_root="${SRCROOT}/Vendor/Pods")
    assert explicit.relative_pods_root == "${SRCROOT}/Vendor/Pods"


def test_facts_are_immutable(target_factory) -> None:
    """Facts cannot be reassigned once validated."""
    target = target_factory()

    with pytest.raises(ValidationError):
        target.requires_frameworks = True


def test_facts_round_trip_through_dict(target_factory) -> None:
    """to_dict output validates back into equal facts."""
    target = target_factory(pod_targets=[make_pod("A", file_accessors=[FileAccessor(libraries=["z"])])])

    assert AggregateTargetFacts.from_dict(target.to_dict()) == target


def test_vendored_paths_relative_to_sandbox() -> None:
    """Relative vendored paths are already expressed from the sandbox root."""
    accessor = FileAccessor(
        vendored_frameworks=["Fabric/Fabric.framework"],
        vendored_libraries=["libRoot.a"],
    )

    settings = accessor.build_settings_for("/project/Pods")

    assert settings["FRAMEWORK_SEARCH_PATHS"] == '"${PODS_ROOT}/Fabric"'
    assert settings["LIBRARY_SEARCH_PATHS"] == '"${PODS_ROOT}"'
    assert settings["OTHER_LDFLAGS"] == '-framework "Fabric" -l"Root"'


def test_vendored_search_paths_list_each_directory_once() -> None:
    """Several vendored frameworks give one quoted entry per directory."""
    accessor = FileAccessor(
        vendored_frameworks=["B/B.framework", "A/A.framework", "A/Extra.framework"],
    )

    settings = accessor.build_settings_for("/project/Pods")

    assert settings["FRAMEWORK_SEARCH_PATHS"] == '"${PODS_ROOT}/A" "${PODS_ROOT}/B"'
    assert "$(inherited)" not in settings["FRAMEWORK_SEARCH_PATHS"]
    assert settings["OTHER_LDFLAGS"] == (
        '-framework "B" -framework "A" -framework "Extra"'
    )


def test_vendored_settings_use_given_overwrite_keys() -> None:
    """The accessor's table follows the merge policy it is given."""
    accessor = FileAccessor(
        libraries=["z"],
        build_settings={"OTHER_LDFLAGS": "-lc++"},
    )

    assert accessor.build_settings_for("Pods")["OTHER_LDFLAGS"] == '-l"z" -lc++'
    overwritten = accessor.build_settings_for("Pods", overwrite_keys=["OTHER_LDFLAGS"])
    assert overwritten["OTHER_LDFLAGS"] == "-lc++"


def test_absolute_vendored_path_needs_absolute_sandbox() -> None:
    """An absolute artifact cannot be related to a relative sandbox root."""
    accessor = FileAccessor(vendored_libraries=["/project/Pods/Sdk/libSdk.a"])

    with pytest.raises(ValueError, match="absolute and relative"):
        accessor.build_settings_for("Pods")


def test_aggregate_rejects_mixed_roots(target_factory) -> None:
    """sandbox_root and client_root must both be absolute or both relative."""
    with pytest.raises(ValidationError, match="absolute and relative"):
        target_factory(sandbox_root="/project/Pods", client_root=".")
    with pytest.raises(ValidationError, match="absolute and relative"):
        target_factory(sandbox_root="Pods", client_root="/project")


def test_aggregate_rejects_client_root_above_base(target_factory) -> None:
    """A relative client root that climbs out of its base is rejected."""
    with pytest.raises(ValidationError, match="leave its base"):
        target_factory(sandbox_root="Pods", client_root="../App")


def test_explicit_pods_root_skips_root_check(target_factory) -> None:
    """An explicit PODS_ROOT does not need relatable roots."""
    target = target_factory(
        sandbox_root="/project/Pods", client_root=".", pods_root="${SRCROOT}/Pods"
    )

    assert target.relative_pods_root == "${SRCROOT}/Pods"


def test_aggregate_rejects_absolute_vendored_path_with_relative_sandbox(
    target_factory,
) -> None:
    """Absolute vendored artifacts need an absolute sandbox root."""
    accessor = FileAccessor(vendored_frameworks=["/project/Pods/A/A.framework"])

    with pytest.raises(ValidationError, match="is absolute"):
        target_factory(
            sandbox_root="Pods",
            client_root=".",
            pod_targets=[make_pod("A", file_accessors=[accessor])],
        )


def test_relative_roots_are_related_lexically(target_factory) -> None:
    """Relative roots resolve without looking at the filesystem."""
    assert target_factory(sandbox_root="Pods", client_root=".").relative_pods_root == (
        "${SRCROOT}/Pods"
    )
    assert target_factory(sandbox_root="Pods", client_root="App").relative_pods_root == (
        "${SRCROOT}/../Pods"
    )
    assert target_factory(sandbox_root="../Pods", client_root=".").relative_pods_root == (
        "${SRCROOT}/../Pods"
    )


def test_headers_store_filters_and_deduplicates() -> None:
    """Entries for other platforms and duplicates are dropped."""
    store = HeadersStore()
    store.add_search_path("Alamofire")
    store.add_search_path("Alamofire/", Platform.IOS)
    store.add_search_path("MacOnly", Platform.OSX)

    assert store.search_paths(Platform.IOS) == [
        "${PODS_ROOT}/Headers/Public",
        "${PODS_ROOT}/Headers/Public/Alamofire",
    ]
    assert store.search_paths(Platform.OSX)[-1] == "${PODS_ROOT}/Headers/Public/MacOnly"
