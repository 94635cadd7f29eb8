"""Tests for the individual aggregate settings builders."""

from __future__ import annotations

from typing import List

from podsettings.models.facts import FileAccessor, HeaderSearchPathEntry
from podsettings.models.platform import IntegrationVariant, Platform
from podsettings.xcconfig.builders import (
    ImportVisibilityBuilder,
    LinkFlagsBuilder,
    RunpathBuilder,
    VendoredArtifactLinker,
)
from podsettings.xcconfig.target_settings import DefaultTargetSettings
from tests.factories import make_framework_pod, make_pod


class StubHeadersStore:
    """Headers store returning fixed paths and recording the platform asked for."""

    def __init__(self, paths: List[str]) -> None:
        self.paths = paths
        self.platforms: List[Platform] = []

    def search_paths(self, platform: Platform) -> List[str]:
        self.platforms.append(platform)
        return list(self.paths)


def _build(builder, target):
    return builder.build(target, IntegrationVariant.for_target(target))


# Import visibility


def test_static_mode_uses_sandbox_header_paths(target_factory) -> None:
    """Static integration emits quoted and -isystem paths from the sandbox."""
    store = StubHeadersStore(["${PODS_ROOT}/Headers/Public", "${PODS_ROOT}/Headers/Public/A"])
    target = target_factory(pod_targets=[make_pod("A")])

    settings = _build(ImportVisibilityBuilder(store), target)

    assert store.platforms == [Platform.IOS]
    assert settings["HEADER_SEARCH_PATHS"] == (
        '$(inherited) "${PODS_ROOT}/Headers/Public" "${PODS_ROOT}/Headers/Public/A"'
    )
    assert settings["OTHER_CFLAGS"] == (
        '$(inherited) -isystem "${PODS_ROOT}/Headers/Public" '
        '-isystem "${PODS_ROOT}/Headers/Public/A"'
    )
    assert "PODS_FRAMEWORK_BUILD_PATH" not in settings
    assert settings.frozen


def test_static_mode_defaults_to_headers_store_from_facts(target_factory) -> None:
    """Without an injected store, entries on the facts are filtered by platform."""
    target = target_factory(
        public_header_search_paths=[
            HeaderSearchPathEntry(path="Alamofire"),
            HeaderSearchPathEntry(path="AppKitOnly", platform=Platform.OSX),
        ]
    )

    settings = _build(ImportVisibilityBuilder(), target)

    assert settings.tokens("HEADER_SEARCH_PATHS") == [
        "$(inherited)",
        "${PODS_ROOT}/Headers/Public",
        "${PODS_ROOT}/Headers/Public/Alamofire",
    ]


def test_framework_mode_roots_headers_by_scope(target_factory) -> None:
    """Scoped pods use the framework build path, unscoped the product name."""
    target = target_factory(
        requires_frameworks=True,
        pod_targets=[
            make_framework_pod("Scoped", scoped=True),
            make_framework_pod("Plain"),
        ],
    )

    settings = _build(ImportVisibilityBuilder(), target)

    assert settings["PODS_FRAMEWORK_BUILD_PATH"] == "$CONFIGURATION_BUILD_DIR"
    assert settings["OTHER_CFLAGS"] == (
        '$(inherited) -iquote "$PODS_FRAMEWORK_BUILD_PATH/Scoped.framework/Headers" '
        '-iquote "Plain.framework/Headers"'
    )
    assert settings["FRAMEWORK_SEARCH_PATHS"] == '$(inherited) "$PODS_FRAMEWORK_BUILD_PATH"'
    assert "HEADER_SEARCH_PATHS" not in settings


def test_framework_search_path_requires_built_scoped_pod(target_factory) -> None:
    """A scoped pod that is not built does not add FRAMEWORK_SEARCH_PATHS."""
    target = target_factory(
        requires_frameworks=True,
        pod_targets=[
            make_framework_pod("Prebuilt", scoped=True, should_build=False),
            make_framework_pod("Built"),
        ],
    )

    settings = _build(ImportVisibilityBuilder(), target)

    assert "FRAMEWORK_SEARCH_PATHS" not in settings


def test_empty_pod_list_yields_settings_without_paths(target_factory) -> None:
    """No pod targets is valid and produces bare inherited values."""
    target = target_factory(requires_frameworks=True)

    settings = _build(ImportVisibilityBuilder(), target)

    assert settings["OTHER_CFLAGS"] == "$(inherited)"


# Vendored artifacts


def test_vendored_settings_skip_built_framework_pods(target_factory) -> None:
    """Only pods that do not build their own framework contribute."""
    accessor = FileAccessor(
        vendored_frameworks=["/project/Pods/Crashlytics/iOS/Crashlytics.framework"],
        vendored_libraries=["/project/Pods/Sdk/lib/libSdk.a"],
        frameworks=["SystemConfiguration"],
    )
    other = FileAccessor(frameworks=["UIKit"])
    target = target_factory(
        requires_frameworks=True,
        pod_targets=[
            make_pod("Vendored", should_build=False, file_accessors=[accessor]),
            make_framework_pod("Embedded", file_accessors=[other]),
        ],
    )

    settings = _build(VendoredArtifactLinker(), target)

    assert settings["OTHER_LDFLAGS"] == (
        '-framework "SystemConfiguration" -framework "Crashlytics" -l"Sdk"'
    )
    assert settings["FRAMEWORK_SEARCH_PATHS"] == (
        '$(inherited) "${PODS_ROOT}/Crashlytics/iOS"'
    )
    assert settings["LIBRARY_SEARCH_PATHS"] == '$(inherited) "${PODS_ROOT}/Sdk/lib"'
    assert "UIKit" not in settings["OTHER_LDFLAGS"]


def test_vendored_settings_include_static_library_pods(target_factory) -> None:
    """Buildable static-library pods still contribute their vendored settings."""
    accessor = FileAccessor(
        libraries=["z"],
        weak_frameworks=["Twitter"],
        build_settings={"OTHER_CFLAGS": "-DVENDORED"},
    )
    target = target_factory(pod_targets=[make_pod("Static", file_accessors=[accessor])])

    settings = _build(VendoredArtifactLinker(), target)

    assert settings["OTHER_LDFLAGS"] == '-l"z" -weak_framework "Twitter"'
    assert settings["OTHER_CFLAGS"] == "-DVENDORED"


# Link flags


def test_link_flags_name_built_pods_once(target_factory) -> None:
    """Built pods appear once each, with -framework or -l by packaging."""
    target = target_factory(
        pod_targets=[
            make_framework_pod("Alamofire"),
            make_pod("Realm"),
            make_pod("Prebuilt", should_build=False),
        ]
    )

    settings = _build(LinkFlagsBuilder(), target)

    assert settings["OTHER_LDFLAGS"] == '-framework "Alamofire" -l "Realm"'
    assert "Prebuilt" not in settings["OTHER_LDFLAGS"]


def test_link_flags_empty_without_built_pods(target_factory) -> None:
    """No built pods yields an empty flag list."""
    target = target_factory(pod_targets=[make_pod("Prebuilt", should_build=False)])

    settings = _build(LinkFlagsBuilder(), target)

    assert settings["OTHER_LDFLAGS"] == ""


# Runpaths


def test_runpath_desktop_application(target_factory) -> None:
    """Desktop applications load frameworks from Contents/Frameworks."""
    target = target_factory(platform="osx", requires_frameworks=True)

    settings = _build(RunpathBuilder(), target)

    assert settings["LD_RUNPATH_SEARCH_PATHS"] == (
        "$(inherited) '@executable_path/../Frameworks' '@loader_path/Frameworks'"
    )


def test_runpath_desktop_unit_test_bundle(target_factory) -> None:
    """Desktop unit test bundles need the extra parent traversal."""
    target = target_factory(
        platform="osx", requires_frameworks=True, native_target_kind="unit_test_bundle"
    )

    settings = _build(RunpathBuilder(), target)

    assert settings.tokens("LD_RUNPATH_SEARCH_PATHS")[-1] == "@loader_path/../Frameworks"


def test_runpath_other_platforms_ignore_target_kind(target_factory) -> None:
    """Non-desktop platforms use the same paths for every target kind."""
    expected = "$(inherited) '@executable_path/Frameworks' '@loader_path/Frameworks'"
    for platform in ("ios", "tvos", "watchos"):
        for kind in ("application", "unit_test_bundle"):
            target = target_factory(
                platform=platform, requires_frameworks=True, native_target_kind=kind
            )
            assert _build(RunpathBuilder(), target)["LD_RUNPATH_SEARCH_PATHS"] == expected


def test_runpath_applies_only_to_framework_integration(target_factory) -> None:
    """The runpath builder is skipped for static integration."""
    builder = RunpathBuilder()

    static = IntegrationVariant.for_target(target_factory())
    framework = IntegrationVariant.for_target(target_factory(requires_frameworks=True))

    assert not builder.applies_to(static)
    assert builder.applies_to(framework)


# Merge policy


def test_builders_share_the_given_overwrite_keys(target_factory) -> None:
    """Partial tables use the merge policy handed to the builder."""
    builders = [
        ImportVisibilityBuilder(overwrite_keys=["OTHER_CFLAGS"]),
        VendoredArtifactLinker(overwrite_keys=["OTHER_CFLAGS"]),
        LinkFlagsBuilder(overwrite_keys=["OTHER_CFLAGS"]),
        RunpathBuilder(overwrite_keys=["OTHER_CFLAGS"]),
    ]
    target = target_factory(requires_frameworks=True, pod_targets=[make_framework_pod("A")])

    for builder in builders:
        assert builder.overwrite_keys == frozenset({"OTHER_CFLAGS"})
        assert _build(builder, target).overwrite_keys == frozenset({"OTHER_CFLAGS"})


def test_vendored_linker_overwrites_configured_keys(target_factory) -> None:
    """Settings of several accessors are overwritten for configured keys."""
    accessors = [
        FileAccessor(build_settings={"OTHER_CFLAGS": "-DFIRST"}),
        FileAccessor(build_settings={"OTHER_CFLAGS": "-DSECOND"}),
    ]
    target = target_factory(pod_targets=[make_pod("A", file_accessors=accessors)])

    accumulated = _build(VendoredArtifactLinker(), target)
    overwritten = _build(VendoredArtifactLinker(overwrite_keys=["OTHER_CFLAGS"]), target)

    assert accumulated["OTHER_CFLAGS"] == "-DFIRST -DSECOND"
    assert overwritten["OTHER_CFLAGS"] == "-DSECOND"


def test_default_target_settings_use_given_overwrite_keys(target_factory) -> None:
    """Target overrides replace generated values of overwrite keys."""
    target = target_factory(uses_swift=True, build_settings={"OTHER_SWIFT_FLAGS": "-DX"})

    accumulated = DefaultTargetSettings().settings_for(target)
    overwritten = DefaultTargetSettings(["OTHER_SWIFT_FLAGS"]).settings_for(target)

    assert accumulated["OTHER_SWIFT_FLAGS"] == '$(inherited) "-D" "COCOAPODS" -DX'
    assert overwritten["OTHER_SWIFT_FLAGS"] == "-DX"
