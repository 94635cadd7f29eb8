"""Facts and platform models consumed by the generator."""

from .facts import (
    AggregateTargetFacts,
    FileAccessor,
    HeaderSearchPathEntry,
    PodTargetFacts,
)
from .platform import (
    IntegrationVariant,
    NativeTargetKind,
    Packaging,
    Platform,
    PlatformFamily,
    TargetRole,
)

__all__ = [
    "AggregateTargetFacts",
    "FileAccessor",
    "HeaderSearchPathEntry",
    "IntegrationVariant",
    "NativeTargetKind",
    "Packaging",
    "Platform",
    "PlatformFamily",
    "PodTargetFacts",
    "TargetRole",
]
