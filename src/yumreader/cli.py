"""Command line interface for browsing YUM repository metadata."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from yumreader import __version__
from yumreader.errors import YumReaderError
from yumreader.repomd import Repomd
from yumreader.repository import PackageChangelogList, PackageList
from yumreader.settings import Settings

logger = logging.getLogger(__name__)


def create_cli_app(console: Console | None = None) -> typer.Typer:
    """Build the Typer application."""

    cli_console = console or Console()
    app = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]}, no_args_is_help=True)

    def version_callback(value: bool) -> None:
        if not value:
            return
        cli_console.print(f"yumreader {__version__}")
        raise typer.Exit()

    @app.callback()
    def main(
        ctx: typer.Context,
        version: bool = typer.Option(
            None, "--version", "-V", help="Show the installed version and exit.", callback=version_callback, is_eager=True
        ),
        debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
        no_cache: bool = typer.Option(False, "--no-cache", help="Always fetch, never read or write the cache."),
        cache_dir: Path | None = typer.Option(None, "--cache-dir", help="Cache directory."),
        cache_expire: int | None = typer.Option(None, "--cache-expire", min=0, help="Cache TTL in seconds."),
    ) -> None:
        if debug:
            logging.getLogger("yumreader").setLevel(logging.DEBUG)
        overrides: dict = {}
        if no_cache:
            overrides["cache_enabled"] = False
        if cache_dir is not None:
            overrides["cache_path"] = cache_dir
        if cache_expire is not None:
            overrides["cache_expire"] = cache_expire
        ctx.obj = Settings(**overrides)

    @app.command("manifest", help="List the metadata documents a repository declares.")
    def manifest_cmd(ctx: typer.Context, url: str = typer.Argument(..., help="Repository base URL.")) -> None:
        with _handle_errors(cli_console):
            with Repomd(url, settings=ctx.obj) as repomd:
                table = Table("role", "location", "checksum", title=repomd.url)
                for entry in repomd.manifest.data:
                    table.add_row(entry.type, entry.location, entry.checksum or "-")
                cli_console.print(table)

    @app.command("packages", help="List packages from primary.xml.")
    def packages_cmd(
        ctx: typer.Context,
        url: str = typer.Argument(..., help="Repository base URL."),
        deps: bool = typer.Option(False, "--deps", help="Also print provides and requires."),
        limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Print at most this many packages."),
    ) -> None:
        with _handle_errors(cli_console):
            packages = PackageList(url, settings=ctx.obj)
            for package in packages.all()[:limit]:
                cli_console.print(f"[bold]{package.nevra}[/bold]", highlight=False)
                if deps:
                    cli_console.print("Provides:")
                    for name in package.provides:
                        cli_console.print(f"  {name}", highlight=False)
                    cli_console.print("Requires:")
                    for name in package.requires:
                        cli_console.print(f"  {name}", highlight=False)
            cli_console.print(f"Total packages: {len(packages)}")

    @app.command("changelog", help="Show package changelogs from other.xml.")
    def changelog_cmd(
        ctx: typer.Context,
        url: str = typer.Argument(..., help="Repository base URL."),
        package: str | None = typer.Option(None, "--package", "-p", help="Only this package."),
        limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Show only the last N entries per package."),
    ) -> None:
        with _handle_errors(cli_console):
            for record in PackageChangelogList(url, settings=ctx.obj):
                if package and record.name != package:
                    continue
                cli_console.print(f"[bold]{record.name}-{record.version}-{record.release}[/bold]", highlight=False)
                entries = record.changelogs[-limit:] if limit else record.changelogs
                for entry in entries:
                    date = entry.date.strftime("%Y-%m-%d") if entry.date else "?"
                    cli_console.print(f"  {date} {entry.author} [{entry.version or '?'}]", highlight=False, markup=False)
                    cli_console.print(f"    {entry.summary}", highlight=False, markup=False)

    return app


@contextmanager
def _handle_errors(console: Console) -> Iterator[None]:
    """Turn library errors into a message and exit code 1."""
    try:
        yield
    except YumReaderError as e:
        logger.debug("Command failed", exc_info=e)
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(code=1) from e


def run_cli(console: Console | None = None) -> None:
    """Execute the CLI application."""

    create_cli_app(console=console)()
