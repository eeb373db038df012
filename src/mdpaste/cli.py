"""CLI entry point for mdpaste."""

import asyncio
from pathlib import Path
from typing import Optional, TextIO

import click
from rich.console import Console

from mdpaste import __version__
from mdpaste.graph.store import GraphStore, GraphWorkspace, PreviewStore
from mdpaste.models.config import Config
from mdpaste.services.clipboard import SystemClipboard, TextSource
from mdpaste.services.exceptions import (
    ClipboardUnavailableError,
    EmptyInputError,
    PageNotFoundError,
)
from mdpaste.services.importer import MarkdownImporter
from mdpaste.services.notifier import ConsoleNotifier
from mdpaste.utils.logging import configure_logging, get_logger
from mdpaste.utils.logseq_urls import create_clickable_link


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mdpaste" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration (default: ~/.config/mdpaste/config.yaml).

    Args:
        config_path: Explicit config file, None for the default location

    Returns:
        Validated Config instance (defaults if the file doesn't exist)

    Raises:
        click.ClickException: If the config file is invalid
    """
    path = config_path or DEFAULT_CONFIG_PATH

    try:
        config = Config.load(path)
        logger.info("config_loaded", path=str(path))
        return config
    except ValueError as e:
        logger.error("config_validation_error", path=str(path), error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


def _source_from(input_file: Optional[TextIO]):
    if input_file is not None:
        return TextSource(input_file.read())
    return SystemClipboard()


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.config/mdpaste/config.yaml)",
)

file_option = click.option(
    "--file",
    "input_file",
    type=click.File("r", encoding="utf-8-sig"),
    default=None,
    help="Read markdown from a file ('-' for stdin) instead of the clipboard",
)


@click.group()
@click.version_option(version=__version__, prog_name="mdpaste")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level (overrides MDPASTE_LOG_LEVEL)")
def cli(verbose: bool):
    """mdpaste: Paste markdown into a Logseq graph as nested outline blocks."""
    configure_logging(level="DEBUG" if verbose else None)


@cli.command()
@file_option
@click.option(
    "--into",
    "into_page",
    default=None,
    help="Append to this existing page instead of creating new pages",
)
@click.option(
    "--graph",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Override Logseq graph path (default: from config)",
)
@config_option
@click.pass_context
def paste(
    ctx: click.Context,
    input_file: Optional[TextIO],
    into_page: Optional[str],
    graph: Optional[Path],
    config_path: Optional[Path],
):
    """
    Paste markdown from the clipboard into the graph.

    Without --into, every '# Heading' starts a new page titled after the
    heading. With --into, everything is appended to that page.

    Examples:
        mdpaste paste                          # Clipboard -> new pages
        mdpaste paste --file notes.md          # File -> new pages
        mdpaste paste --into "Reading List"    # Clipboard -> end of a page
    """
    logger.info("paste_command_started", into=into_page, from_file=input_file is not None)

    config = load_config(config_path)
    if graph is not None:
        config = config.with_graph_path(graph)
    if config.graph.graph_path is None:
        raise click.ClickException(
            "No Logseq graph configured. Pass --graph or set graph.graph_path in config.yaml"
        )

    graph_path = Path(config.graph.graph_path)
    store = GraphStore(graph_path)

    def show_page(page_name: str) -> None:
        click.echo(f"Open: {create_clickable_link(page_name, graph_path)}")

    try:
        workspace = GraphWorkspace(store, active_page=into_page, on_navigate=show_page)
    except PageNotFoundError as e:
        logger.error("target_page_missing", page=into_page)
        raise click.ClickException(str(e))

    importer = MarkdownImporter(
        clipboard=_source_from(input_file),
        workspace=workspace,
        store=store,
        notifier=ConsoleNotifier(Console()),
        settings=config.import_,
    )

    result = asyncio.run(importer.paste_markdown())
    logger.info("paste_command_completed", success=result is not None)

    if result is None or (result.mode == "import" and not result.record_ids):
        ctx.exit(1)


@cli.command()
@file_option
@config_option
def preview(input_file: Optional[TextIO], config_path: Optional[Path]):
    """
    Show the Logseq pages a paste would create, without writing anything.

    Examples:
        mdpaste preview --file notes.md
        pbpaste | mdpaste preview --file -
    """
    config = load_config(config_path)
    console = Console()

    try:
        text = asyncio.run(_source_from(input_file).read_text())
    except ClipboardUnavailableError as e:
        raise click.ClickException(str(e))

    if not text or not text.strip():
        raise click.ClickException(str(EmptyInputError()))

    store = PreviewStore()
    importer = MarkdownImporter(
        clipboard=TextSource(text),
        workspace=store,
        store=store,
        notifier=ConsoleNotifier(console),
        settings=config.import_,
    )
    result = asyncio.run(importer.import_sections(text))
    logger.info("preview_rendered", pages=len(result.record_ids))

    for name in result.record_ids:
        console.rule(name)
        click.echo(store.records[name].render(), nl=False)


def main():
    """Main entry point for setuptools console script."""
    cli()


if __name__ == "__main__":
    main()
