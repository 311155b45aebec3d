"""CLI interface for Docnav.

Command-line tool for checking sidebars and inspecting navigation.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from docnav.config import Config
from docnav.core.errors import SidebarsError
from docnav.core.links import NavigationLink, to_navigation_links
from docnav.core.loader import LoadedSidebars, SidebarsLoader
from docnav.core.sidebars import FirstDocLink

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docnav.toml)",
)
sidebars_file_option = click.option(
    "--sidebars-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Normalized sidebars JSON file (overrides config)",
)
docs_file_option = click.option(
    "--docs-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Document metadata JSON file (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Docnav - sidebar navigation for documentation sites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@sidebars_file_option
@docs_file_option
def check(
    config_path: Path | None,
    sidebars_file: Path | None,
    docs_file: Path | None,
) -> None:
    """Check that sidebars only reference existing documents."""
    config, loaded = _load(config_path, sidebars_file, docs_file)
    sidebar_file_path = str(config.sidebars.sidebars_file)

    try:
        loaded.index.check_legacy_versioned_sidebar_names(
            sidebar_file_path,
            config.sidebars.version_name,
        )
        loaded.index.check_sidebars_doc_ids(
            loaded.docs_by_id,
            sidebar_file_path,
            config.sidebars.version_name,
        )
    except SidebarsError as e:
        _fail(str(e))

    click.echo(
        click.style(
            f"Sidebars OK: {len(loaded.index.sidebar_names)} sidebars checked",
            fg="green",
        ),
    )


@cli.command()
@click.argument("doc_id")
@click.option(
    "--sidebar",
    default=None,
    help="Sidebar to navigate in (default: the sidebar owning the doc)",
)
@click.option(
    "--no-sidebar",
    is_flag=True,
    help="Disable sidebar navigation for the doc",
)
@click.option(
    "--unlisted",
    "-u",
    multiple=True,
    help="Doc id to exclude from navigation (repeatable)",
)
@config_option
@sidebars_file_option
@docs_file_option
def nav(
    doc_id: str,
    sidebar: str | None,
    no_sidebar: bool,
    unlisted: tuple[str, ...],
    config_path: Path | None,
    sidebars_file: Path | None,
    docs_file: Path | None,
) -> None:
    """Show previous/next navigation of a document."""
    _, loaded = _load(config_path, sidebars_file, docs_file)

    try:
        navigation = loaded.index.get_doc_navigation(
            doc_id,
            displayed_sidebar=False if no_sidebar else sidebar,
            unlisted_ids=unlisted,
        )
        links = to_navigation_links(navigation, loaded.docs_by_id)
    except SidebarsError as e:
        _fail(str(e))

    if navigation.sidebar_name is None:
        click.echo(f"Doc {doc_id} is not displayed in any sidebar")
        return

    click.echo(f"Sidebar: {navigation.sidebar_name}")
    click.echo(f"Previous: {_format_link(links.previous)}")
    click.echo(f"Next: {_format_link(links.next)}")


@cli.command("first-link")
@click.argument("sidebar_name")
@config_option
@sidebars_file_option
@docs_file_option
def first_link(
    sidebar_name: str,
    config_path: Path | None,
    sidebars_file: Path | None,
    docs_file: Path | None,
) -> None:
    """Show the first navigable link of a sidebar."""
    _, loaded = _load(config_path, sidebars_file, docs_file)

    link = loaded.index.get_first_link(sidebar_name)
    if link is None:
        _fail(f"Sidebar {sidebar_name} has no navigable link")

    if isinstance(link, FirstDocLink):
        click.echo(f"doc {link.id} ({link.label})")
    else:
        click.echo(f"generated-index {link.permalink} ({link.label})")


@cli.command()
@config_option
@sidebars_file_option
@docs_file_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
def serve(
    config_path: Path | None,
    sidebars_file: Path | None,
    docs_file: Path | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the navigation API server."""
    from docnav.server import run_server

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        sidebars_file=sidebars_file,
        docs_file=docs_file,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Sidebars file: {config.sidebars.sidebars_file}")
    click.echo(f"Docs file: {config.sidebars.docs_file}")

    run_server(config)


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _load(
    config_path: Path | None,
    sidebars_file: Path | None,
    docs_file: Path | None,
) -> tuple[Config, LoadedSidebars]:
    """Load config with overrides, then sidebars and docs.

    Raises:
        SystemExit: If config or data files are invalid
    """
    config = _load_config(config_path).with_overrides(
        sidebars_file=sidebars_file,
        docs_file=docs_file,
    )
    loader = SidebarsLoader(config.sidebars.sidebars_file, config.sidebars.docs_file)
    try:
        return config, loader.load()
    except ValueError as e:
        _fail(str(e))


def _format_link(link: NavigationLink | None) -> str:
    if link is None:
        return "-"
    return f"{link.title} ({link.permalink})"


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
