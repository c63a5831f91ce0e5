"""Write generated metadata back to GitHub."""

from typing import Any

from rich.console import Console
from rich.markup import escape

from gh_metafill.core.github_client import GitHubClient
from gh_metafill.core.models import GeneratedMetadata, RepositorySummary

console = Console()

README_PATH = "README.md"
CREATE_README_MESSAGE = "Add README.md via gh-metafill"
UPDATE_README_MESSAGE = "Update README.md via gh-metafill"


class MetadataApplier:
    """Apply a GeneratedMetadata record to a repository."""

    def __init__(self, client: GitHubClient, output: Console | None = None):
        self.client = client
        self.console = output or console

    def apply(
        self, repo: RepositorySummary, generated: GeneratedMetadata
    ) -> dict[str, str]:
        """Apply every generated field.

        Description/website and topic errors propagate and stop the remaining
        steps. README errors are reported and recorded as "failed".

        Args:
            repo: Target repository
            generated: Fields generated in this run

        Returns:
            Mapping of step name to outcome
        """
        results: dict[str, str] = {}

        if generated.description or generated.website:
            self.update_attributes(repo, generated)
            results["attributes"] = "updated"
            self.console.print("[green]  ✓[/green] Updated repository description/website")

        if generated.topics is not None:
            self.client.replace_topics(repo.owner, repo.name, generated.topics)
            results["topics"] = "updated"
            self.console.print("[green]  ✓[/green] Updated repository topics")

        if generated.readme:
            try:
                results["readme"] = self.write_readme(repo, generated.readme)
                self.console.print("[green]  ✓[/green] Created/Updated README.md")
            except Exception as e:
                results["readme"] = "failed"
                self.console.print(f"[red]  ✗ Error creating README: {escape(str(e))}[/red]")

        return results

    def update_attributes(
        self, repo: RepositorySummary, generated: GeneratedMetadata
    ) -> dict[str, Any]:
        """Send description and homepage in a single repository update."""
        fields: dict[str, Any] = {}
        if generated.description:
            fields["description"] = generated.description
        if generated.website:
            fields["homepage"] = generated.website

        return self.client.update_repo(repo.owner, repo.name, **fields)

    def _existing_readme_sha(self, repo: RepositorySummary) -> str | None:
        # A failed lookup is treated the same as "no README", even when the
        # failure is not a 404.
        try:
            readme = self.client.get_repo_readme(repo.owner, repo.name)
        except Exception:
            return None
        return readme.get("sha")

    def write_readme(self, repo: RepositorySummary, content: str) -> str:
        """Create README.md, or update it in place if a README already exists.

        Returns:
            "created" or "updated"
        """
        sha = self._existing_readme_sha(repo)

        if sha:
            self.client.put_file_contents(
                repo.owner,
                repo.name,
                README_PATH,
                content,
                UPDATE_README_MESSAGE,
                sha=sha,
            )
            return "updated"

        self.client.put_file_contents(
            repo.owner, repo.name, README_PATH, content, CREATE_README_MESSAGE
        )
        return "created"
