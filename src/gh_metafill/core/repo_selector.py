"""List the authenticated user's repositories and filter them for selection."""

from datetime import datetime, timezone

from gh_metafill.core.github_client import GitHubClient
from gh_metafill.core.models import RepositorySummary

PAGE_SIZE = 100


def fetch_all_repositories(client: GitHubClient) -> list[RepositorySummary]:
    """Fetch every repository, most recently updated first.

    Pages of 100 are requested until an empty page comes back.
    """
    repos: list[RepositorySummary] = []
    page = 1
    while True:
        batch = client.get_user_repos_page(page, per_page=PAGE_SIZE, sort="updated")
        if not batch:
            break
        repos.extend(RepositorySummary.from_api(item) for item in batch)
        page += 1
    return repos


def matches_query(repo: RepositorySummary, query: str) -> bool:
    """Case-insensitive substring match on name, language and description."""
    term = (query or "").lower()
    if not term:
        return True
    return (
        term in repo.name.lower()
        or term in (repo.language or "").lower()
        or term in (repo.description or "").lower()
    )


def filter_repositories(
    repos: list[RepositorySummary], query: str
) -> list[RepositorySummary]:
    return [repo for repo in repos if matches_query(repo, query)]


def format_relative_time(timestamp: str | None, now: datetime | None = None) -> str:
    """Format an ISO 8601 timestamp as a short relative age like ``3w ago``."""
    if not timestamp:
        return "--"

    moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    days = (now - moment).days
    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"
