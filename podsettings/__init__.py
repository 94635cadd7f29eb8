"""Aggregate build-settings generation for pod-integrated targets."""

from podsettings.errors import ConfigLoadError, FrozenTableError, PodSettingsError
from podsettings.models.facts import (
    AggregateTargetFacts,
    FileAccessor,
    HeaderSearchPathEntry,
    PodTargetFacts,
)
from podsettings.models.platform import NativeTargetKind, Platform
from podsettings.xcconfig.aggregate import AggregateXCConfig, generate
from podsettings.xcconfig.io import load_xcconfig, save, to_xcconfig
from podsettings.xcconfig.table import MergePolicy, SettingsTable

__all__ = [
    "AggregateTargetFacts",
    "AggregateXCConfig",
    "ConfigLoadError",
    "FileAccessor",
    "FrozenTableError",
    "HeaderSearchPathEntry",
    "MergePolicy",
    "NativeTargetKind",
    "Platform",
    "PodSettingsError",
    "PodTargetFacts",
    "SettingsTable",
    "generate",
    "load_xcconfig",
    "save",
    "to_xcconfig",
]
