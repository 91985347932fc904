"""Command-line interface for chalog."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import click
from rich.table import Table

from . import __version__ as package_version
from .config import (
    DEFAULT_CONFIG_PATH,
    TARGET_CHOICES,
    TARGET_STDOUT,
    Config,
    apply_overrides,
    load_config,
    load_config_if_present,
)
from .generator import Generator
from .releases import Release
from .utils import (
    configure_logging,
    console,
    emit_output,
    format_bold,
    log_debug,
    log_error,
    log_info,
    log_success,
    write_output,
)

VERSION_FLAGS = {"--version", "-V"}
DEFAULT_COMMAND = "generate"
GROUP_VALUE_OPTIONS = {"--config"}
GROUP_FLAGS = {"--debug", "-d", "--help", "-h"}


@dataclass
class CLIContext:
    """Shared command context."""

    config_path: Path
    config_explicit: bool = False
    _config: Optional[Config] = None

    def ensure_config(self) -> Config:
        if self._config is None:
            try:
                if self.config_explicit:
                    self._config = load_config(self.config_path)
                else:
                    self._config = load_config_if_present(self.config_path)
            except FileNotFoundError as error:
                raise click.ClickException(f"Config file not found: {self.config_path}") from error
            except ValueError as error:
                raise click.ClickException(str(error)) from error
            log_debug(f"loaded config from {self.config_path}: {self._config}")
        return self._config

    def resolve_config(self, **overrides: Any) -> Config:
        """Return the loaded config with command-line values applied on top."""
        return apply_overrides(self.ensure_config(), overrides)


def create_cli_context(*, config: Optional[Path] = None, debug: bool = False) -> CLIContext:
    """Return a CLIContext using the same resolution logic as the CLI entry point."""

    configure_logging(debug)
    config_path = config if config is not None else DEFAULT_CONFIG_PATH
    log_debug(f"using config path: {config_path}")
    return CLIContext(config_path=config_path, config_explicit=config is not None)


def _collect_releases(config: Config) -> list[Release]:
    try:
        return Generator().collect(config)
    except (OSError, UnicodeDecodeError) as error:
        raise click.ClickException(f"failed to read {config.input_dir}: {error}") from error


def run_generate(ctx: CLIContext, **overrides: Any) -> str:
    """Generate the changelog and deliver it to the configured target."""

    config = ctx.resolve_config(**overrides)
    try:
        document = Generator().generate(config)
    except (OSError, UnicodeDecodeError) as error:
        raise click.ClickException(f"failed to read {config.input_dir}: {error}") from error

    if config.target == TARGET_STDOUT:
        emit_output(document, newline=False)
        return document

    try:
        write_output(config.output, document)
    except OSError as error:
        raise click.ClickException(f"failed to write {config.output}: {error}") from error
    log_success(f"wrote changelog to {format_bold(str(config.output))}")
    return document


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    type=click.Path(path_type=Path, dir_okay=False),
    help=f"Path to the YAML config file (default: {DEFAULT_CONFIG_PATH}).",
)
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging.",
)
@click.version_option(version=package_version)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], debug: bool) -> None:
    """Merge changelog fragments into a Keep a Changelog document."""

    ctx.obj = create_cli_context(config=config, debug=debug)

    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@cli.command("generate")
@click.option(
    "--in",
    "input_dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Directory containing the release directories.",
)
@click.option(
    "--out",
    "output",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Changelog file to write.",
)
@click.option("--repo", help="Repository base URL used for comparison links.")
@click.option("--unreleased", help="Release name treated as the unreleased section.")
@click.option(
    "--target",
    type=click.Choice(TARGET_CHOICES),
    help="Write to a file or to stdout.",
)
@click.pass_obj
def generate(
    ctx: CLIContext,
    input_dir: Optional[Path] = None,
    output: Optional[Path] = None,
    repo: Optional[str] = None,
    unreleased: Optional[str] = None,
    target: Optional[str] = None,
) -> None:
    """Generate the changelog from the fragment directories."""

    run_generate(
        ctx,
        input_dir=input_dir,
        output=output,
        repo=repo,
        unreleased=unreleased,
        target=target,
    )


@cli.command("releases")
@click.option(
    "--in",
    "input_dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Directory containing the release directories.",
)
@click.pass_obj
def list_releases(ctx: CLIContext, input_dir: Optional[Path] = None) -> None:
    """List discovered releases in changelog order."""

    config = ctx.resolve_config(input_dir=input_dir)
    releases = _collect_releases(config)
    if not releases:
        log_info(f"no releases found in {config.input_dir}.")
        return

    table = Table(box=None, padding=(0, 2, 0, 0), show_header=True)
    table.add_column("NAME", style="cyan")
    table.add_column("META")
    table.add_column("CATEGORIES", style="dim")
    for release in releases:
        table.add_row(release.name, release.meta, ", ".join(release.categories))

    console.print(table)


def _with_default_command(args: list[str]) -> list[str]:
    """Insert the default command after the group options when none is given."""
    if any(arg in cli.commands for arg in args):
        return args
    index = 0
    while index < len(args):
        arg = args[index]
        if arg in GROUP_VALUE_OPTIONS:
            index += 2
        elif arg in GROUP_FLAGS or arg.startswith("--config="):
            index += 1
        else:
            break
    return args[:index] + [DEFAULT_COMMAND] + args[index:]


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    args = list(argv) if argv is not None else list(sys.argv[1:])

    if any(flag in args for flag in VERSION_FLAGS):
        click.echo(package_version)
        return 0

    # Generation options belong to the default command, so `chalog --repo URL` works.
    args = _with_default_command(args)

    try:
        result = cli.main(args=args, prog_name="chalog", standalone_mode=False)
    except click.ClickException as exc:
        log_error(exc.format_message())
        exit_code = getattr(exc, "exit_code", 1)
        return exit_code if isinstance(exit_code, int) else 1
    except click.exceptions.Abort:
        log_error("operation cancelled by user (Ctrl+C).")
        return 130
    return result if isinstance(result, int) else 0
