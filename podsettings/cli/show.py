"""CLI command to print the generated settings of a target."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from podsettings.errors import PodSettingsError
from podsettings.runtime.config_loader import load_generator_config, load_target_facts
from podsettings.xcconfig.aggregate import AggregateXCConfig

logger = logging.getLogger("podsettings.cli.show")


def show_command(args, console: Optional[Console] = None) -> int:
    """Execute show command.

    Args:
        args: Parsed command-line arguments.
        console: Rich Console to print to (defaults to stdout).

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        facts_path = Path(args.facts).expanduser()
        config_source = getattr(args, "config", None)
        if config_source:
            config = load_generator_config(config_source)
        else:
            config = load_generator_config(facts_path, embedded=True)
        targets = load_target_facts(facts_path)

        wanted = getattr(args, "target", None)
        if wanted:
            targets = [t for t in targets if t.name == wanted]
            if not targets:
                logger.error("No aggregate target named %s", wanted)
                return 1

        configuration_name = getattr(args, "configuration", None) or config.configurations[0]

        for target in targets:
            xcconfig = AggregateXCConfig(
                target, configuration_name, **config.generator_options()
            ).generate()

            table = Table(
                title=f"{target.name} ({configuration_name}, {target.platform.display_name})"
            )
            table.add_column("Setting", style="cyan", no_wrap=True)
            table.add_column("Value", overflow="fold")
            for key, value in xcconfig.items():
                table.add_row(Text(key), Text(value))
            console.print(table)

        return 0

    except (PodSettingsError, ValidationError) as e:
        logger.error("Invalid input: %s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Show command failed: %s", e, exc_info=True)
        return 1
