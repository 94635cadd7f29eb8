"""CLI command to generate and save aggregate xcconfigs.

Reads the facts of one or more aggregate targets, generates an xcconfig
per target and build configuration and writes them to the output
directory as ``<target>.<configuration>.xcconfig``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from podsettings.errors import PodSettingsError
from podsettings.runtime.batch import generate_all
from podsettings.runtime.config_loader import load_generator_config, load_target_facts

logger = logging.getLogger("podsettings.cli.generate")


def generate_command(args) -> int:
    """Execute generate command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        facts_path = Path(args.facts).expanduser()
        config_source = getattr(args, "config", None)
        if config_source:
            config = load_generator_config(config_source)
        else:
            config = load_generator_config(facts_path, embedded=True)

        workers = getattr(args, "workers", None)
        if workers:
            config = config.model_copy(update={"max_workers": workers})

        targets = load_target_facts(facts_path)
        output_dir = Path(args.output).expanduser().resolve()
        output_dir.mkdir(parents=True, exist_ok=True)

        results = generate_all(
            targets,
            config=config,
            output_dir=output_dir,
            configurations=getattr(args, "configuration", None),
        )

        failed = [r for r in results if not r.success]
        for result in results:
            if result.success:
                logger.info("Wrote %s", result.path)
            else:
                logger.error(
                    "Failed %s (%s): %s",
                    result.target_name,
                    result.configuration_name,
                    result.error,
                )

        if failed:
            return 1
        logger.info("Generated %d xcconfig(s) in %s", len(results), output_dir)
        return 0

    except (PodSettingsError, ValidationError) as e:
        logger.error("Invalid input: %s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Generate command failed: %s", e, exc_info=True)
        return 1
