"""Validated facts about aggregate targets and their pod targets.

Facts are supplied by the dependency resolver and are never mutated by
the generator. Validation happens eagerly when a model is constructed so
that malformed input fails before any settings are produced.
"""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from podsettings.models.platform import NativeTargetKind, Platform
from podsettings.xcconfig.helper import PODS_ROOT_VAR, quote, relative_path
from podsettings.xcconfig.table import SettingsTable


def _check_product_token(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    if '"' in value:
        raise ValueError(f"{field_name} must not contain double quotes: {value!r}")
    return value


class HeaderSearchPathEntry(BaseModel):
    """A public header directory registered in the sandbox headers store.

    Attributes:
        path: Directory relative to the public headers root.
        platform: Platform the entry applies to; None means every platform.
    """

    path: str
    platform: Optional[Platform] = None

    model_config = {"frozen": True}

    def matches(self, platform: Platform) -> bool:
        return self.platform is None or self.platform is platform


class FileAccessor(BaseModel):
    """Vendored artifacts and system linkage declared by one pod spec.

    Attributes:
        vendored_frameworks: Paths to pre-built ``.framework`` bundles.
        vendored_libraries: Paths to pre-built ``lib*.a`` / ``lib*.dylib`` files.
        frameworks: System frameworks to link.
        weak_frameworks: System frameworks to link weakly.
        libraries: System libraries to link (without ``lib`` prefix).
        build_settings: Extra settings merged verbatim.
    """

    vendored_frameworks: List[str] = Field(default_factory=list)
    vendored_libraries: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    weak_frameworks: List[str] = Field(default_factory=list)
    libraries: List[str] = Field(default_factory=list)
    build_settings: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def build_settings_for(
        self,
        sandbox_root: str,
        overwrite_keys: Optional[Iterable[str]] = None,
    ) -> SettingsTable:
        """Compute the settings required to link these artifacts.

        Search path values hold each directory once, quoted, without the
        inherited placeholder; the caller adds it once for the whole table.

        Args:
            sandbox_root: Sandbox root the vendored paths live under.
            overwrite_keys: Merge policy of the returned table.

        Returns:
            Frozen SettingsTable with linker and search path settings.

        Raises:
            ValueError: If an absolute artifact path is given for a relative
                sandbox root.
        """
        settings = SettingsTable(overwrite_keys=overwrite_keys)

        for library in self.libraries:
            settings.merge({"OTHER_LDFLAGS": f'-l"{library}"'})
        for framework in self.frameworks:
            settings.merge({"OTHER_LDFLAGS": f'-framework "{framework}"'})
        for framework in self.weak_frameworks:
            settings.merge({"OTHER_LDFLAGS": f'-weak_framework "{framework}"'})

        framework_dirs: List[str] = []
        for framework_path in self.vendored_frameworks:
            path = PurePosixPath(framework_path)
            settings.merge({"OTHER_LDFLAGS": f'-framework "{path.stem}"'})
            _append_unique(framework_dirs, _pods_relative_dir(path, sandbox_root))
        if framework_dirs:
            settings.merge({"FRAMEWORK_SEARCH_PATHS": quote(framework_dirs)})

        library_dirs: List[str] = []
        for library_path in self.vendored_libraries:
            path = PurePosixPath(library_path)
            name = path.stem
            if name.startswith("lib"):
                name = name[3:]
            settings.merge({"OTHER_LDFLAGS": f'-l"{name}"'})
            _append_unique(library_dirs, _pods_relative_dir(path, sandbox_root))
        if library_dirs:
            settings.merge({"LIBRARY_SEARCH_PATHS": quote(library_dirs)})

        settings.merge(self.build_settings)
        return settings.freeze()

    def artifact_paths(self) -> List[str]:
        return [*self.vendored_frameworks, *self.vendored_libraries]


def _append_unique(items: List[str], item: str) -> None:
    if item not in items:
        items.append(item)


def _pods_relative_dir(path: PurePosixPath, sandbox_root: str) -> str:
    """Express the directory of a vendored artifact relative to ${PODS_ROOT}."""
    dirname = str(path.parent)
    if path.is_absolute():
        dirname = relative_path(dirname, sandbox_root)
    if dirname in ("", "."):
        return PODS_ROOT_VAR
    return f"{PODS_ROOT_VAR}/{dirname}"


class PodTargetFacts(BaseModel):
    """Facts about one pod target the aggregate target depends on.

    Attributes:
        name: Pod target label.
        product_name: File name of the built product.
        product_basename: Name used in linker flags.
        should_build: False when the binary is supplied pre-built.
        requires_frameworks: Whether the pod is packaged as a framework.
        scoped: Whether outputs live under a namespaced build subdirectory.
        requires_arc: Whether any of the pod's specs require ARC.
        file_accessors: Vendored artifact descriptors.
    """

    name: str
    product_name: str
    product_basename: str
    should_build: bool = True
    requires_frameworks: bool = False
    scoped: bool = False
    requires_arc: bool = True
    file_accessors: List[FileAccessor] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("name", "product_name", "product_basename")
    @classmethod
    def validate_product_tokens(cls, v: str, info: ValidationInfo) -> str:
        """Reject names that cannot be embedded in quoted linker flags."""
        return _check_product_token(v, info.field_name)


class AggregateTargetFacts(BaseModel):
    """Facts about the consuming (aggregate) target.

    Attributes:
        name: Target label, used for generated file names.
        platform: Platform the target builds for.
        requires_frameworks: Whether pods are integrated as frameworks.
        sandbox_root: Path of the Pods sandbox.
        client_root: Path of the user's project directory.
        pods_root: Explicit PODS_ROOT value; derived when omitted.
        configuration_build_dir: Build products directory of the configuration.
        native_target_kind: Product type of the user's native target.
        uses_swift: Whether any pod target contains Swift sources.
        set_arc_compatibility_flag: Whether to add ``-fobjc-arc`` to linker flags.
        pod_targets: Pod targets in build order.
        public_header_search_paths: Sandbox public header entries.
        build_settings: Target-specific settings merged verbatim.
    """

    name: str
    platform: Platform
    requires_frameworks: bool = False
    sandbox_root: str = "Pods"
    client_root: str = "."
    pods_root: Optional[str] = None
    configuration_build_dir: str = "$CONFIGURATION_BUILD_DIR"
    native_target_kind: NativeTargetKind = NativeTargetKind.APPLICATION
    uses_swift: bool = False
    set_arc_compatibility_flag: bool = False
    pod_targets: List[PodTargetFacts] = Field(default_factory=list)
    public_header_search_paths: List[HeaderSearchPathEntry] = Field(
        default_factory=list
    )
    build_settings: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the label is usable as a file name stem."""
        if not v or not v.strip():
            raise ValueError("name must be a non-empty string")
        if "/" in v:
            raise ValueError(f"name must not contain '/': {v!r}")
        return v

    @model_validator(mode="after")
    def validate_unique_pod_targets(self) -> "AggregateTargetFacts":
        """Validate that pod target names are unique."""
        seen = set()
        for pod_target in self.pod_targets:
            if pod_target.name in seen:
                raise ValueError(f"Duplicate pod target: {pod_target.name}")
            seen.add(pod_target.name)
        return self

    @model_validator(mode="after")
    def validate_roots(self) -> "AggregateTargetFacts":
        """Validate that derived paths do not depend on the working directory."""
        if not self.pods_root:
            relative_path(self.sandbox_root, self.client_root)
        if not posixpath.isabs(self.sandbox_root):
            for pod_target in self.pod_targets:
                for accessor in pod_target.file_accessors:
                    for artifact in accessor.artifact_paths():
                        if posixpath.isabs(artifact):
                            raise ValueError(
                                f"Vendored artifact {artifact!r} of {pod_target.name} "
                                f"is absolute but sandbox_root {self.sandbox_root!r} is relative"
                            )
        return self

    @property
    def relative_pods_root(self) -> str:
        """PODS_ROOT expressed relative to the user's project directory."""
        if self.pods_root:
            return self.pods_root
        return "${SRCROOT}/" + relative_path(self.sandbox_root, self.client_root)

    @property
    def requires_arc(self) -> bool:
        return any(pod_target.requires_arc for pod_target in self.pod_targets)

    @classmethod
    def from_dict(cls, data: Dict) -> "AggregateTargetFacts":
        """Create facts from a plain mapping.

        Raises:
            ValidationError: If the facts are invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict:
        return self.model_dump(mode="json")


__all__ = [
    "AggregateTargetFacts",
    "FileAccessor",
    "HeaderSearchPathEntry",
    "PodTargetFacts",
]
