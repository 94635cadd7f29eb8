"""Main CLI entry point for podsettings.

Provides commands: generate, show
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from podsettings.cli.generate import generate_command
from podsettings.cli.show import show_command

logger = logging.getLogger("podsettings.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="podsettings",
        description="Podsettings - Aggregate xcconfig generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate aggregate xcconfig files",
    )
    generate_parser.add_argument(
        "facts",
        help="TOML/JSON file describing the aggregate targets and their pod targets",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output directory for <target>.<configuration>.xcconfig files",
    )
    generate_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional generator configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, a [generator] "
            "table in the facts file or built-in defaults are used."
        ),
    )
    generate_parser.add_argument(
        "--configuration",
        action="append",
        help="Build configuration to generate (repeatable, default: Debug and Release)",
    )
    generate_parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Maximum concurrent workers (default: from configuration, 4)",
    )

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print the generated settings of aggregate targets",
    )
    show_parser.add_argument(
        "facts",
        help="TOML/JSON file describing the aggregate targets and their pod targets",
    )
    show_parser.add_argument(
        "-t",
        "--target",
        help="Only show the aggregate target with this name",
    )
    show_parser.add_argument(
        "-c",
        "--config",
        help="Optional generator configuration (path or inline TOML/JSON)",
    )
    show_parser.add_argument(
        "--configuration",
        help="Build configuration to show (default: first configured)",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "generate":
        return generate_command(args)
    elif args.command == "show":
        return show_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
