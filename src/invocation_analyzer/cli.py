"""CLI entry point using Click."""

from __future__ import annotations

import sys
from typing import Any

import click

from invocation_analyzer import __version__
from invocation_analyzer.config import (
    OUTPUT_MODE_ALL_DATA,
    OUTPUT_MODE_USED_DATA,
    AnalyzerConfig,
    load_config,
    resolve_profile_path,
)
from invocation_analyzer.console_output import ConsoleOutput
from invocation_analyzer.core import DataManager
from invocation_analyzer.dataproviders import get_all_data_providers
from invocation_analyzer.errors import AnalyzerError, ConfigurationError
from invocation_analyzer.tracing import load_profile
from invocation_analyzer.utilities.logger import get_logger, setup_logging

MISSING_PROFILE = "You need to pass a valid path of a profile as the first and only argument."


@click.command()
@click.argument("profile", required=False)
@click.option(
    "--mode",
    "modes",
    multiple=True,
    help="Output mode: all_data or used_data. Repeatable or comma separated.",
)
@click.option("--datum", "data", multiple=True, help="Name of a datum to fetch, e.g. TotalDuration")
@click.option("--plaintext", is_flag=True, help="Disable styled output")
@click.option("--verbose", "-v", is_flag=True, help="Group data by provider and show tracebacks")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Write logs as JSON")
@click.option("--version", is_flag=True, help="Show version and exit")
def main(
    profile: str | None,
    modes: tuple[str, ...],
    data: tuple[str, ...],
    plaintext: bool,
    verbose: bool,
    debug: bool,
    json_logs: bool,
    version: bool,
) -> None:
    """Analyze a build profile written in trace event format.

    PROFILE is a JSON profile, optionally gzip-compressed (.gz).
    """
    if version:
        click.echo(f"invocation-analyzer {__version__}")
        return

    cli_args: dict[str, Any] = {}
    if profile:
        cli_args["profile_path"] = profile
    if modes:
        cli_args["output_modes"] = list(modes)
    if data:
        cli_args["requested_data"] = list(data)
    if plaintext:
        cli_args["plaintext"] = True
    if verbose:
        cli_args["verbose"] = True
    if debug:
        cli_args["debug"] = True
    if json_logs:
        cli_args["json_logs"] = True

    try:
        config = load_config(cli_args=cli_args)
    except ConfigurationError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)

    setup_logging(debug=config.debug, json_output=config.json_logs)

    if not config.profile_path:
        click.echo(MISSING_PROFILE, err=True)
        sys.exit(1)

    output = ConsoleOutput(plaintext=config.plaintext, verbose=config.verbose)
    output.output_header(__version__)
    try:
        _analyze(config, output)
    except Exception as exc:
        output.output_error(exc)
        sys.exit(1)


def _analyze(config: AnalyzerConfig, output: ConsoleOutput) -> None:
    log = get_logger(__name__)
    path = resolve_profile_path(config.profile_path or "", config.working_directory)
    output.output_analysis_input(str(path))

    data_manager = DataManager()
    profile = load_profile(path)
    profile.register_with_data_manager(data_manager)
    for provider in get_all_data_providers():
        provider.register(data_manager)
    log.debug("providers_registered", datum_types=len(data_manager.registered_types))

    _fetch_requested(data_manager, config.requested_data)

    if OUTPUT_MODE_ALL_DATA in config.output_modes:
        output.output_analysis_data(data_manager.get_all_data_by_provider())
    elif OUTPUT_MODE_USED_DATA in config.output_modes:
        output.output_analysis_data(data_manager.get_used_data_by_provider())


def _fetch_requested(data_manager: DataManager, names: list[str]) -> None:
    """Fetch each named datum so that it counts as used.

    Raises:
        ConfigurationError: For a name no registered provider supplies.
    """
    by_name = {t.__name__: t for t in data_manager.registered_types}
    for name in names:
        datum_type = by_name.get(name)
        if datum_type is None:
            raise ConfigurationError(
                f"Unknown datum {name!r}. Available: {', '.join(sorted(by_name))}."
            )
        try:
            data_manager.get_datum(datum_type)
        except AnalyzerError as exc:
            get_logger(__name__).warning("datum_unavailable", datum=name, error=str(exc))


if __name__ == "__main__":
    main()
