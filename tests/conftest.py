"""Shared fixtures for gh-metafill tests."""

import base64

import pytest


@pytest.fixture
def mock_github_token():
    """A fake GitHub token."""
    return "ghp_test_token_1234567890"


@pytest.fixture
def mock_anthropic_key():
    """A fake Anthropic API key."""
    return "sk-ant-test-key"


@pytest.fixture
def no_env_vars(monkeypatch):
    """Remove secrets from the environment and ignore any local .env file."""
    for var in ("GITHUB_TOKEN", "ANTHROPIC_API_KEY", "GH_METAFILL_MODEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("gh_metafill.config.load_dotenv", lambda **kwargs: False)


@pytest.fixture
def env_secrets(monkeypatch, mock_github_token, mock_anthropic_key):
    """Provide both secrets through the environment."""
    monkeypatch.setenv("GITHUB_TOKEN", mock_github_token)
    monkeypatch.setenv("ANTHROPIC_API_KEY", mock_anthropic_key)
    monkeypatch.delenv("GH_METAFILL_MODEL", raising=False)
    monkeypatch.setattr("gh_metafill.config.load_dotenv", lambda **kwargs: False)


@pytest.fixture
def file_payload():
    """Build a contents API payload for a text file."""

    def _payload(text: str, sha: str = "abc123") -> dict:
        return {
            "type": "file",
            "encoding": "base64",
            "sha": sha,
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
        }

    return _payload


@pytest.fixture
def bare_repo_payload():
    """A repository with no description, homepage, or topics."""
    return {
        "id": 1296269,
        "name": "hello-world",
        "full_name": "octocat/hello-world",
        "owner": {"login": "octocat"},
        "description": None,
        "homepage": None,
        "topics": [],
        "language": "Python",
        "stargazers_count": 42,
        "forks_count": 7,
        "private": False,
        "pushed_at": "2024-05-01T12:00:00Z",
        "default_branch": "main",
    }


@pytest.fixture
def complete_repo_payload(bare_repo_payload):
    """A repository with every metadata field populated."""
    return {
        **bare_repo_payload,
        "description": "X",
        "homepage": "https://x.com",
        "topics": ["a"],
    }
