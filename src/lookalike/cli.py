"""Command-line interface for lookalike.

Provides the ``normalize``, ``platform``, ``similar`` and ``exists``
subcommands.
"""

from __future__ import annotations

import functools
import json
import sys
from pathlib import Path
from typing import Any

import click

from lookalike import __version__
from lookalike.config import (
    LookalikeConfig,
    config_from_mapping,
    load_config_file,
    validate_config,
)
from lookalike.formatting import format_similarity_table
from lookalike.logging import get_logger, setup_logging
from lookalike.names import normalize_package_name
from lookalike.platforms import (
    filter_platform_packages,
    group_platform_packages,
    is_platform_specific_package,
)
from lookalike.registry import package_exists, search_packages
from lookalike.similarity import find_similar_packages

log = get_logger("cli")


def _logging_options(func: Any) -> Any:
    func = click.option(
        "--log-file",
        type=click.Path(path_type=Path),
        default=None,
        help="Also write a DEBUG log to this file.",
    )(func)
    func = click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")(func)
    func = click.option("-v", "--verbose", is_flag=True, help="Show debug output.")(func)
    return func


def _resolve_config(config_path: Path | None, overrides: dict[str, Any]) -> LookalikeConfig:
    """Merge the config file and CLI overrides, or fail with a usage error."""
    try:
        data = load_config_file(config_path) if config_path is not None else {}
        config = config_from_mapping(data, cli_overrides=overrides)
    except (FileNotFoundError, ValueError, TypeError) as exc:
        raise click.UsageError(str(exc)) from exc

    errors = validate_config(config)
    if errors:
        raise click.UsageError("; ".join(f"{e.field}: {e.message}" for e in errors))
    return config.normalized()


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """lookalike: identity, platform and similarity checks for npm package names."""


@main.command()
@click.argument("names", nargs=-1, required=True)
@_logging_options
def normalize(names: tuple[str, ...], verbose: bool, quiet: bool, log_file: Path | None) -> None:
    """Print the normalized identity key of each NAME."""
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    for name in names:
        click.echo(f"{name}\t{normalize_package_name(name)}")


@main.command("platform")
@click.argument("names", nargs=-1, required=True)
@click.option("--hide", is_flag=True, help="Only print names that are not platform-specific.")
@click.option("--group", is_flag=True, help="Group platform-specific names by parent package.")
@_logging_options
def platform_cmd(
    names: tuple[str, ...],
    hide: bool,
    group: bool,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Tell which NAMES are per-platform native binary packages."""
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    if hide and group:
        raise click.UsageError("--hide and --group are mutually exclusive")

    if hide:
        for name in filter_platform_packages(names):
            click.echo(name)
        return

    if group:
        for base, members in group_platform_packages(names).items():
            click.echo(base or "(no parent)")
            for member in members:
                click.echo(f"  {member}")
        return

    for name in names:
        verdict = "yes" if is_platform_specific_package(name) else "no"
        click.echo(f"{name}\t{verdict}")


@main.command()
@click.argument("query")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML config file.",
)
@click.option("--registry-url", type=str, default=None, help="Registry base URL.")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@click.option("--size", "search_size", type=int, default=None, help="Search results to fetch.")
@click.option(
    "--threshold",
    "similarity_threshold",
    type=int,
    default=None,
    help="Maximum edit distance for the 'similar' tier.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
@_logging_options
def similar(
    query: str,
    config_path: Path | None,
    registry_url: str | None,
    timeout: float | None,
    search_size: int | None,
    similarity_threshold: int | None,
    output_format: str,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Find registry packages whose names resemble QUERY."""
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    config = _resolve_config(
        config_path,
        {
            "registry_url": registry_url,
            "timeout": timeout,
            "search_size": search_size,
            "similarity_threshold": similarity_threshold,
        },
    )

    search = functools.partial(
        search_packages,
        size=config.search_size,
        registry_url=config.registry_url,
        timeout=config.timeout,
    )
    results = find_similar_packages(query, search=search, threshold=config.similarity_threshold)

    if output_format == "json":
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        click.echo("No similar packages found.")
        return
    click.echo(format_similarity_table(results))


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML config file.",
)
@click.option("--registry-url", type=str, default=None, help="Registry base URL.")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@_logging_options
def exists(
    names: tuple[str, ...],
    config_path: Path | None,
    registry_url: str | None,
    timeout: float | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Check whether each NAME is published. Exits 1 if any is missing."""
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    config = _resolve_config(config_path, {"registry_url": registry_url, "timeout": timeout})

    missing = 0
    for name in names:
        found = package_exists(name, registry_url=config.registry_url, timeout=config.timeout)
        if not found:
            missing += 1
        click.echo(f"{name}\t{'exists' if found else 'missing'}")

    if missing:
        log.debug("%d of %d package(s) missing", missing, len(names))
        sys.exit(1)
