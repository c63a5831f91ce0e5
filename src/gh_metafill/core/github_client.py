"""Thin GitHub REST API client."""

import base64
from typing import Any

import requests


class GitHubAPIError(Exception):
    """Raised when the GitHub API returns an error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}


class GitHubClient:
    """GitHub API client covering the endpoints gh-metafill needs."""

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str | None = None):
        """Initialize the client.

        Args:
            token: GitHub personal access token
        """
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "gh-metafill",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send a request and raise GitHubAPIError on any error status."""
        url = f"{self.BASE_URL}{endpoint}"
        response = self.session.request(method, url, params=params, json=json_data)

        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}

            if (
                response.status_code == 403
                and response.headers.get("X-RateLimit-Remaining") == "0"
            ):
                message = "GitHub API rate limit exceeded"
            else:
                message = data.get("message") or f"HTTP {response.status_code}"

            raise GitHubAPIError(message, response.status_code, data)

        return response

    def get_user_info(self) -> dict[str, Any]:
        """Get the authenticated user."""
        return self._make_request("GET", "/user").json()

    def get_user_repos_page(
        self, page: int, per_page: int = 100, sort: str = "updated"
    ) -> list[dict[str, Any]]:
        """Get one page of repositories for the authenticated user."""
        response = self._make_request(
            "GET",
            "/user/repos",
            params={"page": page, "per_page": per_page, "sort": sort},
        )
        return response.json()

    def get_repo_readme(self, owner: str, repo: str) -> dict[str, Any]:
        """Get the repository README payload (content is base64 encoded)."""
        return self._make_request("GET", f"/repos/{owner}/{repo}/readme").json()

    def get_file_contents(self, owner: str, repo: str, path: str) -> Any:
        """Get a file (or directory listing) at a path in the repository."""
        return self._make_request("GET", f"/repos/{owner}/{repo}/contents/{path}").json()

    def get_repo_tree(self, owner: str, repo: str, ref: str) -> list[dict[str, Any]]:
        """Get the recursive git tree at a branch or commit."""
        response = self._make_request(
            "GET",
            f"/repos/{owner}/{repo}/git/trees/{ref}",
            params={"recursive": "1"},
        )
        return response.json().get("tree", [])

    def update_repo(self, owner: str, repo: str, **fields: Any) -> dict[str, Any]:
        """Update repository attributes such as description and homepage."""
        return self._make_request(
            "PATCH", f"/repos/{owner}/{repo}", json_data=fields
        ).json()

    def replace_topics(self, owner: str, repo: str, names: list[str]) -> list[str]:
        """Replace the full topic set of a repository."""
        response = self._make_request(
            "PUT", f"/repos/{owner}/{repo}/topics", json_data={"names": names}
        )
        return response.json().get("names", [])

    def put_file_contents(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """Create a file, or update it when the prior blob sha is given."""
        data: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if sha:
            data["sha"] = sha

        return self._make_request(
            "PUT", f"/repos/{owner}/{repo}/contents/{path}", json_data=data
        ).json()


def decode_content(payload: dict[str, Any]) -> str:
    """Decode the base64 ``content`` field of a contents API payload."""
    return base64.b64decode(payload.get("content", "")).decode("utf-8")
