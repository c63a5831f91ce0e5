"""Data types shared across gh-metafill."""

from dataclasses import dataclass, field
from typing import Any

FIELD_DESCRIPTION = "description"
FIELD_WEBSITE = "website"
FIELD_TOPICS = "topics"
FIELD_README = "readme"

ALL_FIELDS = [FIELD_DESCRIPTION, FIELD_WEBSITE, FIELD_TOPICS, FIELD_README]

FIELD_LABELS = {
    FIELD_DESCRIPTION: "Description",
    FIELD_WEBSITE: "Website",
    FIELD_TOPICS: "Topics",
    FIELD_README: "README.md",
}


@dataclass(frozen=True)
class RepositorySummary:
    """Repository as listed by the GitHub API. Never mutated locally."""

    id: int
    owner: str
    name: str
    full_name: str
    description: str | None = None
    homepage: str | None = None
    topics: tuple[str, ...] = ()
    language: str | None = None
    stars: int = 0
    forks: int = 0
    private: bool = False
    pushed_at: str | None = None
    default_branch: str = "main"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepositorySummary":
        """Build a summary from a repository payload."""
        owner = (data.get("owner") or {}).get("login", "")
        name = data.get("name", "")
        return cls(
            id=data.get("id", 0),
            owner=owner,
            name=name,
            full_name=data.get("full_name") or f"{owner}/{name}",
            description=data.get("description"),
            homepage=data.get("homepage"),
            topics=tuple(data.get("topics") or ()),
            language=data.get("language"),
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            private=data.get("private", False),
            pushed_at=data.get("pushed_at"),
            default_branch=data.get("default_branch") or "main",
        )


@dataclass(frozen=True)
class Manifest:
    """Parsed package.json fields used as generation context."""

    name: str | None = None
    description: str | None = None
    dependencies: tuple[str, ...] = ()
    scripts: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_package_json(cls, data: dict[str, Any]) -> "Manifest":
        dependencies = data.get("dependencies") or {}
        scripts = data.get("scripts") or {}
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            dependencies=tuple(dependencies) if isinstance(dependencies, dict) else (),
            scripts=dict(scripts) if isinstance(scripts, dict) else {},
        )


@dataclass(frozen=True)
class ConfigFile:
    """A recognized build-config file and its raw text."""

    name: str
    content: str


@dataclass
class RepositoryContext:
    """Snapshot of repository content fed to the generators."""

    name: str
    full_name: str
    description: str = ""
    language: str = "Unknown"
    topics: list[str] = field(default_factory=list)
    private: bool = False
    default_branch: str = "main"
    files: list[str] = field(default_factory=list)
    manifest: Manifest | None = None
    config_file: ConfigFile | None = None


@dataclass
class GeneratedMetadata:
    """Fields produced in this run. Absent fields are never written back."""

    description: str | None = None
    website: str | None = None
    topics: list[str] | None = None
    readme: str | None = None
