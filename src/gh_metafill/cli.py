"""Main CLI entry point for gh-metafill."""

import typer
from rich.console import Console

from gh_metafill import __version__
from gh_metafill.commands.generate import generate_metadata

app = typer.Typer(
    name="gh-metafill",
    help="Backfill missing GitHub repository metadata with an LLM",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"gh-metafill version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Pick a repository, draft its missing metadata, and apply it after review."""
    generate_metadata()


if __name__ == "__main__":
    app()
