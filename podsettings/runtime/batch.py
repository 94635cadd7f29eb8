"""Batch generation of aggregate xcconfigs.

Each aggregate target and configuration pair is an independent job: it
owns its facts snapshot and its settings table, so jobs run concurrently
on a thread pool without coordination. A failing job is recorded in its
result and does not affect the others.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from podsettings.config.schema import GeneratorConfig
from podsettings.models.facts import AggregateTargetFacts
from podsettings.xcconfig.aggregate import AggregateXCConfig
from podsettings.xcconfig.io import save
from podsettings.xcconfig.table import SettingsTable

logger = logging.getLogger("podsettings.runtime.batch")


@dataclass
class GenerationResult:
    """Outcome of generating one target for one configuration."""

    target_name: str
    configuration_name: str
    xcconfig: Optional[SettingsTable] = None
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def generate_all(
    targets: Sequence[AggregateTargetFacts],
    config: Optional[GeneratorConfig] = None,
    output_dir: Optional[Path] = None,
    configurations: Optional[Sequence[str]] = None,
) -> List[GenerationResult]:
    """Generate xcconfigs for many targets concurrently.

    Args:
        targets: Facts of the aggregate targets.
        config: Generator configuration; defaults when omitted.
        output_dir: When given, each xcconfig is saved there.
        configurations: Overrides config.configurations.

    Returns:
        One result per (target, configuration), in input order.
    """
    config = config or GeneratorConfig.default()
    configuration_names = list(configurations or config.configurations)
    jobs: List[Tuple[AggregateTargetFacts, str]] = [
        (target, name) for target in targets for name in configuration_names
    ]
    if not jobs:
        return []

    def run_job(target: AggregateTargetFacts, configuration_name: str) -> GenerationResult:
        result = GenerationResult(target.name, configuration_name)
        generator = AggregateXCConfig(
            target, configuration_name, **config.generator_options()
        )
        result.xcconfig = generator.generate()
        if output_dir is not None:
            filename = config.xcconfig_filename(target.name, configuration_name)
            result.path = save(result.xcconfig, Path(output_dir) / filename)
        return result

    max_workers = min(config.max_workers, len(jobs))
    logger.info(
        "Generating %d xcconfig(s) with %d concurrent workers",
        len(jobs),
        max_workers,
    )

    results: Dict[int, GenerationResult] = {}
    with ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="XCConfig"
    ) as executor:
        futures = {
            executor.submit(run_job, target, name): index
            for index, (target, name) in enumerate(jobs)
        }
        for future in as_completed(futures):
            index = futures[future]
            target, name = jobs[index]
            try:
                results[index] = future.result()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.error(
                    "Generation failed for %s (%s): %s", target.name, name, exc
                )
                results[index] = GenerationResult(target.name, name, error=str(exc))

    failed = sum(1 for r in results.values() if not r.success)
    if failed:
        logger.warning("%d of %d xcconfig(s) failed", failed, len(jobs))
    return [results[index] for index in range(len(jobs))]


__all__ = ["GenerationResult", "generate_all"]
