"""Reading and writing xcconfig files.

An xcconfig is a plain text file with one ``KEY = VALUE`` assignment per
line. Tables are written in their insertion order so regenerated files
only differ when the settings differ.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from podsettings.xcconfig.table import SettingsTable

logger = logging.getLogger("podsettings.xcconfig.io")

_ASSIGNMENT_PATTERN = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*(?:\[[^\]]*\])*)\s*=\s*(.*?)\s*;?\s*$")


def to_xcconfig(table: SettingsTable) -> str:
    """Serialize a table to xcconfig text.

    Args:
        table: Settings to serialize.

    Returns:
        xcconfig text ending with a newline.
    """
    lines = [f"{key} = {value}" for key, value in table.items()]
    return "\n".join(lines) + "\n" if lines else ""


def save(table: SettingsTable, path: Union[str, Path]) -> Path:
    """Write a table to an xcconfig file, creating parent directories.

    Args:
        table: Settings to write.
        path: Destination file.

    Returns:
        Path the table was written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(to_xcconfig(table))
    logger.info("Saved %d setting(s) to %s", len(table), path)
    return path


def parse_xcconfig(
    text: str, overwrite_keys: Optional[Iterable[str]] = None
) -> SettingsTable:
    """Parse xcconfig text into a table.

    Blank lines, ``//`` comments and ``#include`` directives are skipped.
    Repeated keys are merged with the table's policy.

    Args:
        text: xcconfig contents.
        overwrite_keys: Keys merged with the OVERWRITE policy.

    Returns:
        Frozen SettingsTable.

    Raises:
        ValueError: If a line is not a valid assignment.
    """
    table = SettingsTable(overwrite_keys=overwrite_keys)
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith("#include"):
            logger.debug("Ignoring include directive on line %d: %s", lineno, line)
            continue
        match = _ASSIGNMENT_PATTERN.match(line)
        if not match:
            raise ValueError(f"Invalid xcconfig line {lineno}: {raw!r}")
        table.merge({match.group(1): match.group(2)})
    return table.freeze()


def load_xcconfig(path: Union[str, Path]) -> SettingsTable:
    """Read an xcconfig file into a table."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return parse_xcconfig(f.read())


__all__ = ["load_xcconfig", "parse_xcconfig", "save", "to_xcconfig"]
