"""CLI entry point for release-prep."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from tomlkit.exceptions import ParseError

from release_prep.config import InvalidEditorError, load_config
from release_prep.models import ReleaseConfig
from release_prep.pipeline import plan, read_release_version, run_release
from release_prep.versions import BUMP_PARTS, InvalidVersionError, VersionNotFoundError

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="RELEASE_PREP_CONFIG",
    default=None,
    help="Config file. Defaults to release-prep.toml when present.",
)


def _load(config_path: Path | None) -> ReleaseConfig:
    """Load config and check we are at the root of a repo with a manifest."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        raise click.ClickException(f"Config file not found: {config_path}")
    except ParseError as exc:
        raise click.ClickException(f"Invalid TOML in config file: {exc}")
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration:\n{exc}")

    if not Path(".git").exists():
        raise click.ClickException("Not a git repository. Run from the repo root.")
    if not Path(config.manifest).is_file():
        raise click.ClickException(f"Manifest {config.manifest} not found.")
    return config


@click.group()
@click.version_option(package_name="release-prep")
def cli() -> None:
    """Prepare a release commit: bump version, refresh lock and changelog."""


@cli.command()
@config_option
@click.option(
    "--set-version",
    "version",
    default=None,
    metavar="VERSION",
    help="Set this version instead of opening an editor on the manifest.",
)
@click.option(
    "--bump",
    type=click.Choice(BUMP_PARTS),
    default=None,
    help="Bump this part of the current version instead of opening an editor.",
)
def run(config_path: Path | None, version: str | None, bump: str | None) -> None:
    """Run the release preparation pipeline."""
    if version is not None and bump is not None:
        raise click.UsageError("--set-version and --bump are mutually exclusive.")
    config = _load(config_path)
    try:
        run_release(config, version=version, bump=bump)
    except (InvalidEditorError, VersionNotFoundError) as exc:
        raise click.ClickException(str(exc))
    except InvalidVersionError as exc:
        raise click.ClickException(f"Invalid version: {exc}")
    except ParseError as exc:
        raise click.ClickException(f"Invalid TOML in {config.manifest}: {exc}")
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0]))


@cli.command("current-version")
@config_option
def current_version(config_path: Path | None) -> None:
    """Print the version the release commit would use."""
    config = _load(config_path)
    try:
        click.echo(read_release_version(config))
    except VersionNotFoundError as exc:
        raise click.ClickException(str(exc))


@cli.command("plan")
@config_option
def show_plan(config_path: Path | None) -> None:
    """List the commands a run would execute, without running them."""
    config = _load(config_path)
    try:
        steps = plan(config)
    except InvalidEditorError as exc:
        raise click.ClickException(str(exc))
    for number, pipeline_step in enumerate(steps, start=1):
        click.echo(f"{number}. {pipeline_step.name}: {pipeline_step}")
