"""Helpers for loading generator configuration and target facts.

Both loaders accept the same kinds of sources:

* None -> defaults (configuration only)
* dict -> validated directly
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Union

from podsettings.config.schema import GeneratorConfig
from podsettings.errors import ConfigLoadError
from podsettings.models.facts import AggregateTargetFacts

logger = logging.getLogger("podsettings.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def _read_source(source: Union[str, Path]) -> Dict[str, Any]:
    """Read a file path or inline string into a mapping.

    Raises:
        ConfigLoadError: If the text cannot be parsed or is not a mapping.
    """
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # e.g. inline text longer than the platform's file name limit
        is_file = False
    if is_file:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigLoadError(f"Cannot read {path}: {exc}") from exc
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            # Fallback: guess from content
            fmt = _detect_format(text)
        logger.info("Loading %s from file: %s", fmt, path)
    elif isinstance(source, Path):
        raise ConfigLoadError(f"File not found: {path}")
    else:
        text = str(source)
        fmt = _detect_format(text)
        logger.debug("Loading inline %s string", fmt)

    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigLoadError(f"Malformed {fmt.upper()} source: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError("Top-level configuration must be a mapping/dict")
    return data


def load_generator_config(source: ConfigSource, embedded: bool = False) -> GeneratorConfig:
    """Load GeneratorConfig from various configuration sources.

    A ``generator`` table, when present, is used instead of the top level,
    so a facts file can carry its own configuration.

    Args:
        source: None, an already-parsed mapping, a path to a .toml/.json
            file, or an inline TOML/JSON string.
        embedded: Read only the ``generator`` table of the source (e.g. a
            facts file) and use defaults when it is absent.

    Returns:
        GeneratorConfig instance.

    Raises:
        ConfigLoadError: If the source cannot be read or parsed.
        ValidationError: If the configuration is invalid.
    """
    if source is None:
        logger.debug("No config source provided; using default GeneratorConfig")
        return GeneratorConfig.default()

    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    if embedded and "generator" not in data:
        logger.debug("No generator table in source; using default GeneratorConfig")
        return GeneratorConfig.default()

    section = data.get("generator", data)
    if not isinstance(section, dict):
        raise ConfigLoadError("'generator' must be a mapping/dict")
    return GeneratorConfig.from_dict(section)


def load_target_facts(source: Union[str, Path, Dict[str, Any]]) -> List[AggregateTargetFacts]:
    """Load aggregate target facts.

    The document either holds a ``targets`` list or describes a single
    target at the top level. Any ``generator`` table is ignored here.

    Args:
        source: Mapping, path to a .toml/.json file, or inline TOML/JSON.

    Returns:
        Validated facts in document order.

    Raises:
        ConfigLoadError: If the source cannot be read or has no targets.
        ValidationError: If any target's facts are invalid.
    """
    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        raise TypeError(f"Unsupported facts source type: {type(source)!r}")

    if "targets" in data:
        entries = data["targets"]
        if not isinstance(entries, list):
            raise ConfigLoadError("'targets' must be a list of target mappings")
    else:
        entries = [{k: v for k, v in data.items() if k != "generator"}]

    if not entries:
        raise ConfigLoadError("No aggregate targets defined")

    targets = [AggregateTargetFacts.from_dict(entry) for entry in entries]
    logger.debug("Loaded facts for %d aggregate target(s)", len(targets))
    return targets


__all__ = ["load_generator_config", "load_target_facts"]
