"""Interactive metadata generation command."""

import requests
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from gh_metafill.config import load_settings
from gh_metafill.core.context_builder import build_context
from gh_metafill.core.gap_detector import detect_missing_fields
from gh_metafill.core.github_client import GitHubAPIError, GitHubClient
from gh_metafill.core.metadata_applier import MetadataApplier
from gh_metafill.core.metadata_generator import MetadataGenerator
from gh_metafill.core.models import (
    FIELD_DESCRIPTION,
    FIELD_LABELS,
    FIELD_README,
    FIELD_TOPICS,
    FIELD_WEBSITE,
    GeneratedMetadata,
    RepositorySummary,
)
from gh_metafill.core.repo_selector import fetch_all_repositories, format_relative_time
from gh_metafill.tui.pickers import choose_fields, search_repository

console = Console()

TABLE_ROWS = 15


def generate_metadata() -> None:
    """Generate missing description, website, topics and README for a repository."""
    console.print(
        Panel.fit(
            "[bold white]GitHub Repository Metadata Generator[/bold white]",
            border_style="cyan",
        )
    )

    settings = load_settings(console)
    client = GitHubClient(settings.github_token)
    generator = MetadataGenerator(settings.anthropic_api_key, model=settings.model)

    console.print("\n[yellow]⏳[/yellow] Fetching your repositories...\n")

    try:
        client.get_user_info()
    except (GitHubAPIError, requests.RequestException):
        console.print("[red]✗ Error: Invalid GitHub token or API error.[/red]")
        raise typer.Exit(1)

    try:
        repos = fetch_all_repositories(client)
        if not repos:
            console.print("[red]✗[/red] No repositories found.")
            raise typer.Exit(0)

        console.print(f"[green]✓[/green] Found [bold]{len(repos)}[/bold] repositories\n")
        _display_repos_table(repos)

        selected = search_repository(repos)
        if selected is None:
            raise typer.Abort()
        console.print(f"\n[green]✓[/green] Selected: [bold white]{escape(selected.full_name)}[/bold white]\n")

        missing = detect_missing_fields(client, selected)
        if not missing:
            console.print(
                "[green]✓[/green] This repository already has all metadata fields populated!"
            )
            if not Confirm.ask(
                "[cyan]Would you like to regenerate any fields anyway?[/cyan]",
                default=False,
                console=console,
            ):
                raise typer.Exit(0)
        else:
            labels = ", ".join(FIELD_LABELS[key] for key in missing)
            console.print(f"[yellow]⚠[/yellow] Missing fields: [bold]{labels}[/bold]")

        fields = choose_fields(missing)
        if not fields:
            console.print("[yellow]⚠[/yellow] No fields selected. Exiting.")
            raise typer.Exit(0)

        console.print("\n[yellow]⏳[/yellow] Analyzing repository content...\n")
        context = build_context(client, selected, console)

        generated = GeneratedMetadata()

        if FIELD_DESCRIPTION in fields:
            console.print("[blue]⟳[/blue] Generating description...")
            generated.description = generator.generate_description(context)
            console.print(f"[green]  ✓[/green] {escape(generated.description)}\n")

        if FIELD_WEBSITE in fields:
            console.print("[blue]⟳[/blue] Generating website suggestion...")
            generated.website = generator.generate_website(context)
            console.print(
                f"[green]  ✓[/green] [cyan underline]{escape(generated.website)}[/cyan underline]\n"
            )

        if FIELD_TOPICS in fields:
            console.print("[blue]⟳[/blue] Generating topics...")
            generated.topics = generator.generate_topics(context)
            console.print(
                f"[green]  ✓[/green] [magenta]{escape(', '.join(generated.topics))}[/magenta]\n"
            )

        if FIELD_README in fields:
            console.print("[blue]⟳[/blue] Generating README.md...")
            generated.readme = generator.generate_readme(context)
            console.print("[green]  ✓[/green] README.md content generated\n")

        _display_summary(generated)

        if not Confirm.ask(
            "[cyan]Apply these changes to the repository?[/cyan]",
            default=True,
            console=console,
        ):
            console.print("[yellow]⚠[/yellow] Changes cancelled.")
            raise typer.Exit(0)

        console.print("\n[yellow]⏳[/yellow] Applying changes...\n")
        _apply_changes(client, selected, generated)

    except (typer.Exit, typer.Abort):
        raise
    except GitHubAPIError as e:
        console.print(f"[red]✗ GitHub API Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]✗ Fatal error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _apply_changes(
    client: GitHubClient, repo: RepositorySummary, generated: GeneratedMetadata
) -> None:
    """Apply generated fields; any propagated error ends the run with status 1."""
    try:
        MetadataApplier(client, console).apply(repo, generated)
    except GitHubAPIError as e:
        console.print(f"[red]✗ Error applying changes: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]✗ Error applying changes: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print()
    console.print(
        Panel.fit(
            "[bold white]All changes applied successfully![/bold white]",
            border_style="green",
        )
    )


def _display_repos_table(repos: list[RepositorySummary]) -> None:
    """Display the first repositories in a table."""
    table = Table(title="Your Repositories", title_style="bold cyan")

    table.add_column("Name", style="bold cyan", max_width=30, no_wrap=True)
    table.add_column("Language", style="blue", max_width=15)
    table.add_column("★ Stars", justify="right", style="yellow")
    table.add_column("⑂ Forks", justify="right", style="magenta")
    table.add_column("Updated", style="green")
    table.add_column("Visibility")
    table.add_column("Description", style="white", max_width=30)

    for repo in repos[:TABLE_ROWS]:
        if repo.description:
            description = escape(repo.description[:27])
            if len(repo.description) > 27:
                description += "..."
        else:
            description = "[dim]No description[/dim]"

        visibility = "[yellow]private[/yellow]" if repo.private else "[green]public[/green]"

        table.add_row(
            escape(repo.name),
            escape(repo.language) if repo.language else "[dim]--[/dim]",
            str(repo.stars),
            str(repo.forks),
            format_relative_time(repo.pushed_at),
            visibility,
            description,
        )

    if len(repos) > TABLE_ROWS:
        table.caption = f"... and {len(repos) - TABLE_ROWS} more repositories"

    console.print(table)


def _display_summary(generated: GeneratedMetadata) -> None:
    """Preview the generated fields before applying them."""
    lines: list[str] = []

    if generated.description:
        lines.extend([
            "[bold]📝 Description:[/bold]",
            f"   {escape(generated.description)}",
            "",
        ])

    if generated.website:
        lines.extend([
            "[bold]🔗 Website:[/bold]",
            f"   [cyan underline]{escape(generated.website)}[/cyan underline]",
            "",
        ])

    if generated.topics is not None:
        tags = "  ".join(f"[magenta]#{escape(topic)}[/magenta]" for topic in generated.topics)
        lines.extend(["[bold]🏷️  Topics:[/bold]", f"   {tags}", ""])

    if generated.readme:
        lines.append(
            f"[bold]📄 README.md:[/bold] [dim]({len(generated.readme)} characters)[/dim]"
        )
        lines.append("[dim]   ─────────────────────────────────────────────[/dim]")
        for line in generated.readme[:400].split("\n")[:8]:
            lines.append(f"[dim]   {escape(line)}[/dim]")
        lines.append("[dim]   ─────────────────────────────────────────────[/dim]")

    console.print()
    console.print(
        Panel(
            "\n".join(lines).rstrip(),
            title="[bold]Generated Metadata Summary[/bold]",
            border_style="cyan",
        )
    )
