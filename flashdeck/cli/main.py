"""
CLI entry point for flashdeck.
"""

# Standard library imports
import logging
from pathlib import Path
from typing import List, Optional

# Third-party imports
import typer
from rich.console import Console
from rich.table import Table

# Local application imports
from flashdeck.cli._pack_logic import pack_logic
from flashdeck.cli._show_logic import AttachmentStatus, show_logic
from flashdeck.config import settings
from flashdeck.deck import Deck
from flashdeck.exceptions import DeckError


console = Console()

app = typer.Typer(
    name="flashdeck",
    help="Flashdeck: pack flashcard decks and their files into portable archives.",
    add_completion=False,
    rich_markup_mode="markdown",
)


@app.callback()
def _configure_logging():
    """Configure logging for CLI runs from FLASHDECK_LOG_LEVEL."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Pack
# ---------------------------------------------------------------------------


@app.command()
def pack(
    name: str = typer.Argument(..., help="Name of the new deck."),
    output_dir: Path = typer.Option(  # noqa: B008
        ...,
        "--out",
        help="Existing directory that receives the archive.",
        file_okay=False,
        dir_okay=True,
    ),
    attach: Optional[List[str]] = typer.Option(  # noqa: B008
        None,
        "--attach",
        help="File to attach, as PATH or PATH:RC. Repeatable.",
    ),
):
    """
    Create a deck named NAME with the given attachments and save it as an archive.
    """
    try:
        archive_path = pack_logic(
            name=name, output_dir=output_dir, attach=attach or []
        )
    except DeckError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]Deck saved to[/bold green] [cyan]{archive_path}[/cyan]"
    )


# ---------------------------------------------------------------------------
# Show
# ---------------------------------------------------------------------------


def _display_deck_summary(cons: Console, deck: Deck):
    """
    Print a two-column table with the deck's id, name and counts.
    """
    summary = Table(title="Deck", show_header=False)
    summary.add_column("Field", style="cyan")
    summary.add_column("Value", style="magenta")
    summary.add_row("Id", deck.id)
    summary.add_row("Name", deck.name)
    summary.add_row("Cards", str(len(deck.cards)))
    summary.add_row("Attachments", str(len(deck.attachments)))
    cons.print(summary)


def _display_attachments(cons: Console, statuses: List[AttachmentStatus]):
    """
    Print one row per attachment; missing files are flagged in red.
    """
    if not statuses:
        cons.print("[yellow]This deck has no attachments.[/yellow]")
        return

    table = Table(title="Attachments")
    table.add_column("Id", style="cyan")
    table.add_column("Ext", style="magenta")
    table.add_column("Refs", style="yellow")
    table.add_column("File")
    for status in statuses:
        table.add_row(
            status.id,
            status.ext or "-",
            str(status.rc),
            "[green]stored[/green]"
            if status.file_present
            else "[red]missing[/red]",
        )
    cons.print(table)


@app.command()
def show(
    archive_path: Path = typer.Argument(  # noqa: B008
        ..., help="Deck archive to inspect."
    ),
    storage_dir: Path = typer.Option(  # noqa: B008
        ...,
        "--storage",
        help="Directory that receives the extracted attachment files.",
        file_okay=False,
        dir_okay=True,
    ),
):
    """
    Load a deck archive, extract its attachments and print its contents.
    """
    try:
        deck, statuses = show_logic(archive_path, storage_dir)
    except DeckError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    _display_deck_summary(console, deck)
    _display_attachments(console, statuses)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
