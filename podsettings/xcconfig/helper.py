"""Shared helpers for composing xcconfig values."""

from __future__ import annotations

import posixpath
from typing import Iterable, Optional

INHERITED = "$(inherited)"
PODS_ROOT_VAR = "${PODS_ROOT}"
FRAMEWORK_BUILD_PATH_VAR = "$PODS_FRAMEWORK_BUILD_PATH"


def quote(strings: Iterable[str], prefix: Optional[str] = None) -> str:
    """Sort and double-quote strings, optionally preceding each with a flag.

    Args:
        strings: Values to quote.
        prefix: Flag emitted before each quoted value (e.g. ``-isystem``).

    Returns:
        Space-joined quoted values.

    Examples:
        >>> quote(["b", "a"], "-iquote")
        '-iquote "a" -iquote "b"'
    """
    lead = f"{prefix} " if prefix else ""
    return " ".join(f'{lead}"{value}"' for value in sorted(strings))


def inherited(value: str) -> str:
    """Prefix a value with the inherited-settings placeholder."""
    if not value:
        return INHERITED
    return f"{INHERITED} {value}"


def relative_path(path: str, start: str) -> str:
    """Express a path relative to a start directory without consulting the cwd.

    Both paths must be absolute, or both relative. A relative start must
    not climb above its base with leading ``..`` components.

    Args:
        path: Path to express.
        start: Directory the result is relative to.

    Returns:
        Normalized relative path, ``.`` when both are the same.

    Raises:
        ValueError: If the paths cannot be related lexically.

    Examples:
        >>> relative_path("/work/Pods", "/work/App")
        '../Pods'
    """
    if posixpath.isabs(path) != posixpath.isabs(start):
        raise ValueError(
            f"Cannot relate {path!r} to {start!r}: mix of absolute and relative paths"
        )
    path_parts = [p for p in posixpath.normpath(path).split("/") if p not in ("", ".")]
    start_parts = [p for p in posixpath.normpath(start).split("/") if p not in ("", ".")]
    if ".." in start_parts:
        raise ValueError(f"Relative start must not leave its base directory: {start!r}")

    common = 0
    for path_part, start_part in zip(path_parts, start_parts):
        if path_part != start_part:
            break
        common += 1
    parts = [".."] * (len(start_parts) - common) + path_parts[common:]
    return "/".join(parts) or "."


def default_ld_flags(target) -> str:
    """Default linker flags for an aggregate target.

    ``-ObjC`` is always present; ``-fobjc-arc`` is added when the target
    asks for the ARC compatibility flag and a pod target requires ARC.
    """
    ld_flags = "-ObjC"
    if target.set_arc_compatibility_flag and target.requires_arc:
        ld_flags += " -fobjc-arc"
    return ld_flags


__all__ = [
    "FRAMEWORK_BUILD_PATH_VAR",
    "INHERITED",
    "PODS_ROOT_VAR",
    "default_ld_flags",
    "inherited",
    "quote",
    "relative_path",
]
