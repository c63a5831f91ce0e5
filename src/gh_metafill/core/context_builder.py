"""Gather a bounded snapshot of repository content for generation."""

import json

import requests
from rich.console import Console

from gh_metafill.core.github_client import GitHubAPIError, GitHubClient, decode_content
from gh_metafill.core.models import (
    ConfigFile,
    Manifest,
    RepositoryContext,
    RepositorySummary,
)

console = Console()

MAX_FILES = 100
MANIFEST_PATH = "package.json"

# Probed in order; the first one found is attached.
CONFIG_FILES = [
    "Cargo.toml",
    "pyproject.toml",
    "setup.py",
    "go.mod",
    "pom.xml",
    "build.gradle",
]


def build_context(
    client: GitHubClient,
    repo: RepositorySummary,
    output: Console | None = None,
) -> RepositoryContext:
    """Build the generation context for a repository.

    Never raises. If the tree cannot be fetched, only the fields seeded from
    the summary are returned and a warning is printed.

    Args:
        client: Authenticated GitHub client
        repo: Selected repository
        output: Console for status messages

    Returns:
        Repository context record
    """
    output = output or console
    context = RepositoryContext(
        name=repo.name,
        full_name=repo.full_name,
        description=repo.description or "",
        language=repo.language or "Unknown",
        topics=list(repo.topics),
        private=repo.private,
        default_branch=repo.default_branch,
    )

    try:
        tree = client.get_repo_tree(repo.owner, repo.name, repo.default_branch)
    except (GitHubAPIError, requests.RequestException):
        output.print(
            "[yellow]  ⚠ Warning: Could not fetch full repository context[/yellow]"
        )
        return context

    context.files = [
        item["path"] for item in tree if item.get("type") == "blob"
    ][:MAX_FILES]
    context.manifest = _fetch_manifest(client, repo)
    context.config_file = _fetch_config_file(client, repo)

    return context


def _fetch_text(client: GitHubClient, repo: RepositorySummary, path: str) -> str | None:
    """Fetch a file as text, or None if it is absent or unreadable."""
    try:
        payload = client.get_file_contents(repo.owner, repo.name, path)
    except (GitHubAPIError, requests.RequestException):
        return None

    # Directories come back as lists
    if not isinstance(payload, dict) or not payload.get("content"):
        return None

    try:
        return decode_content(payload)
    except ValueError:
        return None


def _fetch_manifest(client: GitHubClient, repo: RepositorySummary) -> Manifest | None:
    text = _fetch_text(client, repo, MANIFEST_PATH)
    if text is None:
        return None

    try:
        data = json.loads(text)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None
    return Manifest.from_package_json(data)


def _fetch_config_file(
    client: GitHubClient, repo: RepositorySummary
) -> ConfigFile | None:
    for name in CONFIG_FILES:
        text = _fetch_text(client, repo, name)
        if text is not None:
            return ConfigFile(name=name, content=text)
    return None
