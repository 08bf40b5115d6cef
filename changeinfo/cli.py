"""CLI entrypoint for changeinfo."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import find_config, load_config
from .errors import ConfigError


def _read_input(source: Path | None) -> str:
    if source is None:
        return sys.stdin.read()
    return source.read_text(encoding="utf-8")


@click.group()
@click.version_option(__version__, prog_name="changeinfo")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to changeinfo.toml (defaults to the nearest changeinfo.toml or pyproject.toml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """changeinfo - Encode and decode VersionPress-style commit messages.

    A commit body holds one fragment per tracked change, separated by blank
    lines, followed by an X-VP-Version trailer.
    """
    ctx.ensure_object(dict)
    if config_path is None:
        config_path = find_config(Path.cwd())
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument(
    "message_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def decode(ctx: click.Context, message_file: Path | None, output_json: bool) -> None:
    """Decode a commit message (subject, blank line, body) and list its changes.

    Reads MESSAGE_FILE, or stdin when omitted. Changes are listed most
    important first.
    """
    from .commands.envelope_cmd import run_decode

    exit_code = run_decode(_read_input(message_file), ctx.obj["config"], output_json=output_json)
    sys.exit(exit_code)


@cli.command()
@click.argument(
    "changes_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--version-tag",
    "version",
    type=str,
    default=None,
    metavar="VERSION",
    help="Version written to the X-VP-Version trailer (defaults to the configured version)",
)
@click.pass_context
def encode(ctx: click.Context, changes_file: Path | None, version: str | None) -> None:
    """Build a commit message from change infos given as JSON.

    CHANGES_FILE (or stdin) holds an object or a list of objects, each with a
    "category" key plus the fields of that change info type, e.g.
    {"category": "post", "action": "create", "entity_id": "1A2B", "post_title": "Hello"}.
    """
    from .commands.envelope_cmd import run_encode

    exit_code = run_encode(_read_input(changes_file), ctx.obj["config"], version=version)
    sys.exit(exit_code)


@cli.command()
@click.pass_context
def priorities(ctx: click.Context) -> None:
    """Show the order in which change categories are ranked."""
    from .commands.envelope_cmd import run_priorities

    exit_code = run_priorities(ctx.obj["config"])
    sys.exit(exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
