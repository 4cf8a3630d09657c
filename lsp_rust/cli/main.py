"""Command-line entry point for inspecting how sessions would start.

Prints the launch command, workspace root or handshake configuration the
adapter would use, so setup problems can be diagnosed outside the editor.
"""

from __future__ import annotations

import json

import click

from lsp_rust import __version__
from lsp_rust.lsp.config_store import ConfigurationStore
from lsp_rust.lsp.connection import ConnectionResolver
from lsp_rust.lsp.profiles import Backend
from lsp_rust.lsp.settings import ClientSettings
from lsp_rust.lsp.workspace_root import WorkspaceRootResolver
from lsp_rust.types.errors import LspRustError
from lsp_rust.utils.logger import configure_logging
from lsp_rust.utils.subprocess_util import format_command, split_command

BACKEND_CHOICE = click.Choice([b.value for b in Backend])


def _fail(error: LspRustError) -> None:
    click.echo(error.get_formatted_message(), err=True)
    raise SystemExit(1)


def _parse_value(raw: str) -> str | int | bool:
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        return raw


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lsp-rust", message="lsp-rust v%(version)s")
@click.option("--log-level", default=None, help="Log level (default: INFO, DEBUG if DEBUG=true).")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """lsp-rust - Rust language server client adapter."""
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--backend", type=BACKEND_CHOICE, default=Backend.RLS.value, show_default=True)
@click.option("--server-command", default=None, help="Explicit server command line.")
def command(backend: str, server_command: str | None) -> None:
    """Print the command used to launch BACKEND."""
    settings = ClientSettings.from_env()
    if server_command:
        if Backend(backend) is Backend.RLS:
            settings.rls_command = split_command(server_command)
        else:
            settings.rust_analyzer_command = split_command(server_command)
    try:
        click.echo(format_command(ConnectionResolver(settings).resolve_command(backend)))
    except LspRustError as e:
        _fail(e)


@cli.command()
@click.argument("directory", default=".", type=click.Path(exists=True, file_okay=False))
def root(directory: str) -> None:
    """Print the Cargo workspace root for DIRECTORY."""
    try:
        click.echo(str(WorkspaceRootResolver().resolve_root(directory)))
    except LspRustError as e:
        _fail(e)


@cli.command()
@click.option("--set", "options", multiple=True, metavar="KEY=VALUE", help="Option to include.")
def config(options: tuple[str, ...]) -> None:
    """Print the configuration pushed to the server after the handshake."""
    store = ConfigurationStore()
    for option in options:
        key, sep, value = option.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{option}'", param_hint="--set")
        store.set(key, _parse_value(value))
    click.echo(json.dumps(store.configuration_payload(), indent=2, sort_keys=True))


if __name__ == "__main__":
    cli()
