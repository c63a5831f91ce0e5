"""Unit tests for MetadataApplier."""

import base64
import json

import pytest
import responses

from gh_metafill.core.github_client import GitHubAPIError, GitHubClient
from gh_metafill.core.metadata_applier import (
    CREATE_README_MESSAGE,
    UPDATE_README_MESSAGE,
    MetadataApplier,
)
from gh_metafill.core.models import GeneratedMetadata, RepositorySummary

REPO_URL = "https://api.github.com/repos/octocat/hello-world"


@pytest.fixture
def repo(bare_repo_payload):
    return RepositorySummary.from_api(bare_repo_payload)


def _calls(method, url):
    return [
        call for call in responses.calls
        if call.request.method == method and call.request.url.split("?")[0] == url
    ]


class TestMetadataApplier:
    """Test MetadataApplier.apply."""

    @responses.activate
    def test_description_and_website_in_one_update(self, mock_github_token, repo):
        """Test description and homepage go out in a single PATCH."""
        responses.add(responses.PATCH, REPO_URL, json={}, status=200)

        applier = MetadataApplier(GitHubClient(mock_github_token))
        results = applier.apply(
            repo,
            GeneratedMetadata(description="Says hello", website="https://example.com"),
        )

        patches = _calls("PATCH", REPO_URL)
        assert len(patches) == 1
        assert json.loads(patches[0].request.body) == {
            "description": "Says hello",
            "homepage": "https://example.com",
        }
        assert results == {"attributes": "updated"}

    @responses.activate
    def test_website_only(self, mock_github_token, repo):
        """Test only the present attribute is sent."""
        responses.add(responses.PATCH, REPO_URL, json={}, status=200)

        MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(website="https://example.com")
        )

        body = json.loads(_calls("PATCH", REPO_URL)[0].request.body)
        assert body == {"homepage": "https://example.com"}

    @responses.activate
    def test_topics_replace_full_set(self, mock_github_token, repo):
        """Test topics are replaced, not merged."""
        responses.add(
            responses.PUT, f"{REPO_URL}/topics", json={"names": ["python"]}, status=200
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(topics=["python"])
        )

        body = json.loads(_calls("PUT", f"{REPO_URL}/topics")[0].request.body)
        assert body == {"names": ["python"]}
        assert not _calls("PATCH", REPO_URL)
        assert results == {"topics": "updated"}

    @responses.activate
    def test_readme_created_without_sha(self, mock_github_token, repo):
        """Test a new README is created with no content hash."""
        responses.add(
            responses.GET, f"{REPO_URL}/readme", json={"message": "Not Found"}, status=404
        )
        responses.add(
            responses.PUT, f"{REPO_URL}/contents/README.md", json={}, status=201
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(readme="# hello-world")
        )

        body = json.loads(_calls("PUT", f"{REPO_URL}/contents/README.md")[0].request.body)
        assert "sha" not in body
        assert body["message"] == CREATE_README_MESSAGE
        assert base64.b64decode(body["content"]).decode("utf-8") == "# hello-world"
        assert results == {"readme": "created"}

    @responses.activate
    def test_readme_updated_with_prior_sha(self, mock_github_token, repo, file_payload):
        """Test an existing README is updated with its prior hash."""
        responses.add(
            responses.GET,
            f"{REPO_URL}/readme",
            json=file_payload("# old", sha="deadbeef"),
            status=200,
        )
        responses.add(
            responses.PUT, f"{REPO_URL}/contents/README.md", json={}, status=200
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(readme="# new")
        )

        body = json.loads(_calls("PUT", f"{REPO_URL}/contents/README.md")[0].request.body)
        assert body["sha"] == "deadbeef"
        assert body["message"] == UPDATE_README_MESSAGE
        assert results == {"readme": "updated"}

    @responses.activate
    def test_readme_lookup_error_treated_as_absent(self, mock_github_token, repo):
        """Test any README lookup failure falls back to a create call."""
        responses.add(
            responses.GET, f"{REPO_URL}/readme", json={"message": "boom"}, status=500
        )
        responses.add(
            responses.PUT, f"{REPO_URL}/contents/README.md", json={}, status=201
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(readme="# hello-world")
        )

        body = json.loads(_calls("PUT", f"{REPO_URL}/contents/README.md")[0].request.body)
        assert "sha" not in body
        assert results == {"readme": "created"}

    @responses.activate
    def test_readme_failure_is_reported_not_raised(self, mock_github_token, repo, capsys):
        """Test a README write error keeps earlier fields applied."""
        responses.add(responses.PATCH, REPO_URL, json={}, status=200)
        responses.add(
            responses.PUT, f"{REPO_URL}/topics", json={"names": ["python"]}, status=200
        )
        responses.add(
            responses.GET, f"{REPO_URL}/readme", json={"message": "Not Found"}, status=404
        )
        responses.add(
            responses.PUT,
            f"{REPO_URL}/contents/README.md",
            json={"message": "Resource not accessible by integration"},
            status=403,
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo,
            GeneratedMetadata(description="Says hello", topics=["python"], readme="# hi"),
        )

        assert results == {
            "attributes": "updated",
            "topics": "updated",
            "readme": "failed",
        }
        assert "Error creating README" in capsys.readouterr().out

    @responses.activate
    def test_attribute_failure_halts_remaining_steps(self, mock_github_token, repo):
        """Test a failed attribute update propagates and skips later fields."""
        responses.add(
            responses.PATCH, REPO_URL, json={"message": "Must have admin rights"}, status=403
        )

        applier = MetadataApplier(GitHubClient(mock_github_token))

        with pytest.raises(GitHubAPIError):
            applier.apply(
                repo,
                GeneratedMetadata(description="Says hello", topics=["python"], readme="# hi"),
            )

        assert len(responses.calls) == 1

    @responses.activate
    def test_empty_topics_still_replace(self, mock_github_token, repo):
        """Test a generated but empty topic list clears the topic set."""
        responses.add(responses.PUT, f"{REPO_URL}/topics", json={"names": []}, status=200)

        MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(topics=[])
        )

        body = json.loads(_calls("PUT", f"{REPO_URL}/topics")[0].request.body)
        assert body == {"names": []}

    @responses.activate
    def test_nothing_generated(self, mock_github_token, repo):
        """Test no calls are made for an empty record."""
        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata()
        )

        assert results == {}
        assert len(responses.calls) == 0

    @responses.activate
    def test_readme_failure_message_with_brackets(self, mock_github_token, repo, capsys):
        """Test an error message that looks like markup is printed verbatim."""
        responses.add(
            responses.GET, f"{REPO_URL}/readme", json={"message": "Not Found"}, status=404
        )
        responses.add(
            responses.PUT,
            f"{REPO_URL}/contents/README.md",
            json={"message": "path [/README.md] rejected"},
            status=422,
        )

        results = MetadataApplier(GitHubClient(mock_github_token)).apply(
            repo, GeneratedMetadata(readme="# hi")
        )

        assert results == {"readme": "failed"}
        assert "path [/README.md] rejected" in capsys.readouterr().out
