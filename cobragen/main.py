"""
cobragen — CLI entrypoint.

Usage:
    python -m cobragen.main --help
    python -m cobragen.main --license mit init myapp
    python -m cobragen.main add serve-http
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from cobragen import __version__
from cobragen.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="cobragen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .cobra.yaml (default: auto-detect).",
)
@click.option("--author", "-a", default=None, help="Author name for copyright attribution.")
@click.option("--license", "-l", "license_key", default=None, help="License for the project.")
@click.option("--year", default=None, help="Copyright year (default: current year).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    author: str | None,
    license_key: str | None,
    year: str | None,
) -> None:
    """cobragen — generate Cobra application skeletons."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["author"] = author
    ctx.obj["license"] = license_key
    ctx.obj["year"] = year

    setup_logging(level=level_from_flags(verbose, quiet, debug), quiet_third_party=not debug)


def _settings(ctx: click.Context) -> tuple[str, str, str | None]:
    """Merge config file values with CLI flags → (license, author, year)."""
    from cobragen.core.config.loader import ConfigError, load_config
    from cobragen.core.models.config import is_valid_year

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    license_key = ctx.obj.get("license") or config.license
    author = ctx.obj.get("author") or config.author
    year = ctx.obj.get("year") or config.year or None
    if year and not is_valid_year(year):
        click.secho(f"❌ Year must be four digits, got '{year}'", fg="red", err=True)
        sys.exit(1)
    return license_key, author, year


def _warn_unknown_license(license_key: str) -> None:
    from cobragen.core.services.licenses import default_catalog

    catalog = default_catalog()
    if license_key in catalog:
        return
    hint = catalog.find_by_alias(license_key)
    suggestion = f" (did you mean '{hint.key}'?)" if hint and not hint.is_none else ""
    click.secho(
        f"⚠️  Unknown license '{license_key}'{suggestion}; generating without a license.",
        fg="yellow",
        err=True,
    )


# ── init ────────────────────────────────────────────────────────


@cli.command("init")
@click.argument("path", required=False, default=".")
@click.option("--module", "-m", "module_name", default=None, help="Go module import path.")
@click.option("--app-name", default=None, help="Root command name (default: directory name).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def init_cmd(
    ctx: click.Context,
    path: str,
    module_name: str | None,
    app_name: str | None,
    as_json: bool,
) -> None:
    """Initialize a Cobra application in PATH (default: current directory)."""
    from cobragen.core.use_cases.init_project import init_project

    license_key, author, year = _settings(ctx)
    if not as_json:
        _warn_unknown_license(license_key)

    result = init_project(
        Path(path),
        license_key=license_key,
        author=author,
        year=year,
        module_name=module_name,
        app_name=app_name,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.secho("✅ Your Cobra application is ready at", fg="green", bold=True)
        click.echo(f"   {result.project_root}")
        for written in result.files:
            click.echo(f"     • {Path(written).relative_to(result.project_root)}")
        click.echo()
        click.echo("   Next: go get github.com/spf13/cobra")


cli.add_command(init_cmd, "initialize")
cli.add_command(init_cmd, "create")


# ── add ─────────────────────────────────────────────────────────


@cli.command("add")
@click.argument("name")
@click.option(
    "--path",
    "target",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory inside the project (default: current directory).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def add_cmd(ctx: click.Context, name: str, target: str, as_json: bool) -> None:
    """Add command NAME to an existing Cobra application.

    Example: cobragen add serve-http → cmd/serveHttp.go
    """
    from cobragen.core.use_cases.add_command import add_command

    result = add_command(name, Path(target))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ {result.command_name} created at {result.file}", fg="green")
        if not result.license_recognized:
            click.secho("   LICENSE not recognized; header copied from cmd/root.go as-is.", fg="yellow")


# ── licenses ────────────────────────────────────────────────────


@cli.command("licenses")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def licenses_cmd(as_json: bool) -> None:
    """List supported license keys."""
    from cobragen.core.services.licenses import default_catalog

    catalog = default_catalog()

    if as_json:
        click.echo(json.dumps([d.model_dump(mode="json") for d in catalog], indent=2))
        return

    click.secho(f"\n📜 Licenses: {len(catalog)}", fg="cyan", bold=True)
    for definition in catalog:
        click.echo(f"   • {definition.key:<8} {definition.display_name}")
        if definition.aliases:
            click.echo(f"     aliases: {', '.join(definition.aliases)}")
    click.echo()


# ── config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate .cobra.yaml configuration."""
    from cobragen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid and result.config is not None:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result.config_path or '(defaults)'}")
        click.echo(f"   Author: {result.config.author}")
        click.echo(f"   License: {result.config.license}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
