"""Work out which metadata fields a repository is missing."""

import requests

from gh_metafill.core.github_client import GitHubAPIError, GitHubClient
from gh_metafill.core.models import (
    FIELD_DESCRIPTION,
    FIELD_README,
    FIELD_TOPICS,
    FIELD_WEBSITE,
    RepositorySummary,
)


def readme_is_missing(client: GitHubClient, repo: RepositorySummary) -> bool:
    """Return True only when the README lookup answers 404.

    Any other failure leaves the README "not confirmed absent".
    """
    try:
        client.get_repo_readme(repo.owner, repo.name)
    except GitHubAPIError as e:
        return e.status_code == 404
    except requests.RequestException:
        return False
    return False


def detect_missing_fields(client: GitHubClient, repo: RepositorySummary) -> list[str]:
    """Compute the missing fields of a repository, in display order."""
    missing: list[str] = []

    if not (repo.description or "").strip():
        missing.append(FIELD_DESCRIPTION)
    if not (repo.homepage or "").strip():
        missing.append(FIELD_WEBSITE)
    if not repo.topics:
        missing.append(FIELD_TOPICS)
    if readme_is_missing(client, repo):
        missing.append(FIELD_README)

    return missing
