"""Settings builders invoked by the aggregate generator."""

from .base import SettingsBuilder
from .import_visibility import ImportVisibilityBuilder
from .link_flags import LinkFlagsBuilder
from .runpath import RunpathBuilder
from .vendored import VendoredArtifactLinker

__all__ = [
    "ImportVisibilityBuilder",
    "LinkFlagsBuilder",
    "RunpathBuilder",
    "SettingsBuilder",
    "VendoredArtifactLinker",
]
