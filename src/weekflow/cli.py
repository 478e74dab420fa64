"""Command-line interface for weekflow."""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from ._version import __version__
from .calculator import WeekCalculator
from .cli_utils import setup_logging
from .config import ConfigLoader, WeekflowConfig
from .errors import WeekflowError


_COMMON_OPTIONS = [
    click.argument("date"),
    click.option(
        "--format",
        "output_format",
        type=click.Choice(["text", "json"], case_sensitive=False),
        default="text",
        help="Output format (default: text)",
    ),
    click.option(
        "--config",
        "-c",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Path to YAML configuration file",
    ),
    click.option(
        "--on-invalid",
        type=click.Choice(["raise", "fallback"], case_sensitive=False),
        default=None,
        help="Policy for unparsable dates (overrides config file)",
    ),
    click.option(
        "--log",
        type=click.Choice(["none", "INFO", "DEBUG"], case_sensitive=False),
        default="none",
        help="Enable logging with specified level (default: none)",
    ),
]


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the argument and options shared by every week command."""
    for decorator in reversed(_COMMON_OPTIONS):
        func = decorator(func)
    return func


def is_debug_mode() -> bool:
    """Return True when WEEKFLOW_DEBUG is "1", "true" or "yes" (case-insensitive)."""
    return os.getenv("WEEKFLOW_DEBUG", "").lower() in ("1", "true", "yes")


def build_calculator(config: Optional[Path], on_invalid: Optional[str]) -> WeekCalculator:
    """Create a calculator from the config file, or the environment when no file is given."""
    weekflow_config = ConfigLoader.load(config) if config else ConfigLoader.from_env()
    if on_invalid:
        weekflow_config = WeekflowConfig(
            on_invalid=on_invalid.lower(), fallback_date=weekflow_config.fallback_date
        )
    return WeekCalculator(weekflow_config)


def run_command(
    date: str,
    output_format: str,
    config: Optional[Path],
    on_invalid: Optional[str],
    log: str,
    compute: Callable[[WeekCalculator, str], Any],
    render_text: Callable[[Any], str],
) -> None:
    """Shared body of the week commands: configure, compute, print, report errors."""
    logger = setup_logging(log, __name__)

    try:
        calculator = build_calculator(config, on_invalid)
        result = compute(calculator, date)
    except WeekflowError as e:
        logger.debug("Command failed for %r", date, exc_info=True)
        click.echo(f"❌ Error: {e}", err=True)
        if is_debug_mode():
            raise
        sys.exit(1)

    if output_format.lower() == "json":
        payload = result.to_dict() if hasattr(result, "to_dict") else {"week_number": result}
        click.echo(json.dumps(payload))
    else:
        click.echo(render_text(result))


@click.group()
@click.version_option(version=__version__, prog_name="weekflow")
@click.help_option("-h", "--help")
def cli() -> None:
    """Weekflow - Monday-to-Sunday week numbers and week ranges.

    DATE accepts YYYY-MM-DD or any date string dateutil can parse.
    Dates are interpreted in UTC.
    """


@cli.command(name="number")
@common_options
def week_number_command(
    date: str, output_format: str, config: Optional[Path], on_invalid: Optional[str], log: str
) -> None:
    """Print the week number of DATE."""
    run_command(
        date,
        output_format,
        config,
        on_invalid,
        log,
        compute=lambda calculator, value: calculator.week_number(value),
        render_text=str,
    )


@cli.command(name="range")
@common_options
def week_range_command(
    date: str, output_format: str, config: Optional[Path], on_invalid: Optional[str], log: str
) -> None:
    """Print the Monday and Sunday of the week containing DATE."""
    run_command(
        date,
        output_format,
        config,
        on_invalid,
        log,
        compute=lambda calculator, value: calculator.week_range(value),
        render_text=lambda week: f"{week.start.date().isoformat()} {week.end.date().isoformat()}",
    )


@cli.command(name="info")
@common_options
def week_info_command(
    date: str, output_format: str, config: Optional[Path], on_invalid: Optional[str], log: str
) -> None:
    """Print the week number and range of the week containing DATE."""
    run_command(
        date,
        output_format,
        config,
        on_invalid,
        log,
        compute=lambda calculator, value: calculator.week_info(value),
        render_text=lambda info: (
            f"Week {info.week_number}: "
            f"{info.start.date().isoformat()} - {info.end.date().isoformat()}"
        ),
    )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
