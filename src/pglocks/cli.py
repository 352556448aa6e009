#!/usr/bin/env python3
"""
pglocks CLI - Command Line Interface
Look up PostgreSQL lock modes, the commands that take them and their conflicts
"""

import os
import sys
from functools import cached_property
from pathlib import Path
from typing import List, NoReturn, Optional

import click
from rich.console import Console

from pglocks._version import __version__
from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.catalog.loader import load_catalog
from pglocks.core.config import Settings
from pglocks.core.exceptions import PgLocksError
from pglocks.core.logging import logger
from pglocks.engine.descriptions import DescriptionGenerator
from pglocks.engine.relationships import RelationshipEngine
from pglocks.engine.search import search_items
from pglocks.export.writer import StaticExporter
from pglocks.models.reference import Command, ReferenceItem
from pglocks.render import description_text, items_table, matrix_table


class CliContext:
    """
    Settings, catalog and engine for one CLI invocation.

    The catalog is loaded on first use so `--help` never touches the data.
    """

    def __init__(self, data_path: Optional[Path] = None):
        self.data_path = data_path

    @cached_property
    def settings(self) -> Settings:
        return Settings()

    @cached_property
    def catalog(self) -> ReferenceCatalog:
        return load_catalog(self.data_path or self.settings.data_file)

    @cached_property
    def engine(self) -> RelationshipEngine:
        return RelationshipEngine(self.catalog)

    @cached_property
    def descriptions(self) -> DescriptionGenerator:
        return DescriptionGenerator(self.engine)

    def resolve(self, name: str) -> Optional[ReferenceItem]:
        """Command first, then lock; retries with normalized case and spacing."""
        for candidate in (name, " ".join(name.split()).upper()):
            item = self.catalog.get_command(candidate) or self.catalog.get_lock(candidate)
            if item is not None:
                return item
        return None


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)
    sys.exit(1)


def _require(ctx_obj: CliContext, name: str) -> ReferenceItem:
    item = ctx_obj.resolve(name)
    if item is None:
        _fail(f"Unknown command or lock: {name}")
    return item


class PgLocksGroup(click.Group):
    """Reports PgLocksError as a click error instead of a traceback."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except PgLocksError as e:
            logger.error("Command failed", code=e.code, error=e.message)
            hints = "".join(f"\n  Hint: {suggestion}" for suggestion in e.suggestions)
            raise click.ClickException(f"{e.message}{hints}") from e


@click.group(cls=PgLocksGroup)
@click.version_option(version=__version__, prog_name="pglocks")
@click.option(
    "--data",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Reference table (YAML or JSON) instead of the bundled one",
)
@click.pass_context
def cli(ctx: click.Context, data: Optional[Path]):
    """
    pglocks - PostgreSQL lock reference

    Which locks each SQL command takes and what they block.
    """
    ctx.obj = CliContext(data)


@cli.command()
@click.option("--table/--no-table", default=True, help="Include table locks")
@click.option("--row/--no-row", default=True, help="Include row locks")
@click.pass_obj
def matrix(obj: CliContext, table: bool, row: bool):
    """Show the lock conflict matrix"""
    if not table and not row:
        _fail("Nothing to show: both --no-table and --no-row given")

    grid = obj.engine.conflict_matrix(include_table=table, include_row=row)
    Console().print(matrix_table(grid))


@cli.command()
@click.argument("name")
@click.option("--markdown", is_flag=True, help="Print markdown instead of styled text")
@click.pass_obj
def describe(obj: CliContext, name: str, markdown: bool):
    """Describe a command or a lock"""
    item = _require(obj, name)
    if item.kind == "command":
        description = obj.descriptions.describe_command(item.name)
    else:
        description = obj.descriptions.describe_lock(item.name)

    if description is None:
        _fail(f"Unknown command or lock: {name}")

    if markdown:
        click.echo(description.to_markdown())
    else:
        Console().print(description_text(description), soft_wrap=True)


@cli.command()
@click.argument("name")
@click.pass_obj
def conflicts(obj: CliContext, name: str):
    """List what a command or lock conflicts with"""
    item = _require(obj, name)
    engine = obj.engine

    if item.kind == "command":
        header = f" acquires: {', '.join(item.locks) or '-'}"
        conflicting_locks = engine.conflicting_locks_for_command(item.name)
        blocked = engine.conflicting_commands(item.name)
    else:
        header = f" ({item.type} lock)"
        conflicting_locks = engine.conflicting_locks(item.name)
        blocked = engine.commands_conflicting_with_lock(item.name)

    click.echo(click.style(item.name, bold=True) + header)
    click.echo(f"Conflicting locks: {', '.join(conflicting_locks) or '-'}")
    click.echo(f"Conflicting commands ({len(blocked)}):")
    for command_name in blocked:
        click.echo(f"  - {command_name}")


@cli.command("can-run")
@click.argument("first")
@click.argument("second")
@click.pass_obj
def can_run(obj: CliContext, first: str, second: str):
    """Check whether two commands can run concurrently"""
    pair: List[Command] = []
    for raw in (first, second):
        item = obj.resolve(raw)
        if item is None or item.kind != "command":
            _fail(f"Unknown command: {raw}")
        pair.append(item)  # type: ignore[arg-type]
    cmd_a, cmd_b = pair

    if obj.engine.commands_can_run_concurrently(cmd_a.name, cmd_b.name):
        message = f"✓ {cmd_a.name} and {cmd_b.name} can run concurrently"
        click.echo(click.style(message, fg="green"))
        return

    click.echo(click.style(f"✗ {cmd_a.name} and {cmd_b.name} conflict", fg="red"))
    for lock_a in cmd_a.locks:
        for lock_b in cmd_b.locks:
            if obj.engine.have_conflict(lock_a, lock_b):
                click.echo(f"  {lock_a} conflicts with {lock_b}")
    sys.exit(1)


@cli.command()
@click.argument("query", required=False, default="")
@click.option("--commands/--no-commands", default=True, help="Include commands")
@click.option("--locks/--no-locks", default=True, help="Include locks")
@click.option("--table/--no-table", default=True, help="Include table locks")
@click.option("--row/--no-row", default=True, help="Include row locks")
@click.pass_obj
def search(obj: CliContext, query: str, commands: bool, locks: bool, table: bool, row: bool):
    """Search commands and locks by name or description"""
    items = search_items(
        obj.catalog,
        query,
        include_commands=commands,
        include_locks=locks,
        include_table_locks=table,
        include_row_locks=row,
    )
    if not items:
        click.echo(f'No results found for "{query}"')
        return

    title = f"Search Results ({len(items)})" if query.strip() else "All Commands & Locks"
    Console().print(items_table(items, title=title))
    click.echo(f"{len(items)} result(s)")


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: export.output_dir from .pglocks, else ./public)",
)
@click.pass_obj
def export(obj: CliContext, output: Optional[Path]):
    """Generate the static JSON API"""
    output_dir = output or obj.settings.export_dir
    click.echo(click.style("Generating API files...", fg="cyan"))

    result = StaticExporter(obj.engine).export(output_dir)

    click.echo(
        f"Generated {len(result.command_files)} command files and "
        f"{len(result.lock_files)} lock files in {result.api_dir}"
    )
    click.echo(click.style("✓ API generation complete!", fg="green"))


@cli.command()
@click.option("--host", default=None, help="Bind address (default: api.host)")
@click.option("--port", default=None, type=int, help="Port (default: api.port)")
@click.pass_obj
def serve(obj: CliContext, host: Optional[str], port: Optional[int]):
    """Serve the JSON API over HTTP"""
    import uvicorn

    from pglocks.api import create_app

    app = create_app(catalog=obj.catalog, settings=obj.settings)
    uvicorn.run(
        app,
        host=host or obj.settings.get("api.host", "127.0.0.1"),
        port=port or obj.settings.get("api.port", 8000),
        log_level="info",
    )


def main():
    """Main entry point"""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(0)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        if os.environ.get("PGLOCKS_DEBUG"):
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
