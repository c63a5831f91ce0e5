"""Draft repository metadata fields with Claude."""

import json
import re
from typing import Any

from gh_metafill.core.models import RepositoryContext

DEFAULT_MODEL = "claude-3-haiku-20240307"
TEMPERATURE = 0.7

MAX_DESCRIPTION_LENGTH = 350
MAX_TOPICS = 10
MAX_TOPIC_LENGTH = 50


class GenerationError(Exception):
    """Raised when the model returns no usable text."""


def clean_description(text: str) -> str:
    """Trim whitespace and hard-truncate to GitHub's description limit."""
    return text.strip()[:MAX_DESCRIPTION_LENGTH]


def parse_topics(text: str) -> list[str]:
    """Turn a comma-separated model reply into a list of topic names.

    Each piece is trimmed, lowercased and has whitespace runs replaced with a
    hyphen. Empty pieces and pieces over 50 characters are dropped and at
    most 10 topics are kept, in order.
    """
    topics: list[str] = []
    for piece in text.split(","):
        topic = re.sub(r"\s+", "-", piece.strip().lower())
        if topic and len(topic) <= MAX_TOPIC_LENGTH:
            topics.append(topic)
    return topics[:MAX_TOPICS]


class MetadataGenerator:
    """Generate description, website, topics and README text for a repository."""

    def __init__(self, anthropic_api_key: str, model: str = DEFAULT_MODEL):
        """Initialize the generator.

        Args:
            anthropic_api_key: Anthropic API key
            model: Anthropic model to use
        """
        self.anthropic_api_key = anthropic_api_key
        self.model = model
        self._anthropic_client: Any = None

    def _get_anthropic_client(self) -> Any:
        """Get or create the Anthropic client."""
        if self._anthropic_client is None:
            from anthropic import Anthropic

            self._anthropic_client = Anthropic(api_key=self.anthropic_api_key)
        return self._anthropic_client

    def _complete(self, prompt: str, max_tokens: int) -> str:
        """Send a single user message and return the first text block."""
        response = self._get_anthropic_client().messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )

        if not response.content:
            raise GenerationError("Model returned an empty response")

        text = getattr(response.content[0], "text", None)
        if text is None:
            raise GenerationError("Model response contained no text")
        return text

    def generate_description(self, context: RepositoryContext) -> str:
        """Generate a repository description (at most 350 characters)."""
        parts = [
            "Generate a concise, professional GitHub repository description "
            "(max 150 characters) for a repository with the following details:",
            "",
            f"Repository name: {context.name}",
            f"Primary language: {context.language}",
            f"Current topics: {', '.join(context.topics) or 'None'}",
            f"Files in repository: {', '.join(context.files[:20])}",
        ]
        if context.manifest:
            parts.append(
                f"Package.json name: {context.manifest.name}, "
                f"description: {context.manifest.description or 'None'}"
            )
        if context.config_file:
            parts.append(
                f"Config file ({context.config_file.name}): "
                f"{context.config_file.content[:500]}"
            )
        parts.extend([
            "",
            "Return ONLY the description text, no quotes or extra formatting.",
        ])

        return clean_description(self._complete("\n".join(parts), max_tokens=100))

    def generate_website(self, context: RepositoryContext) -> str:
        """Suggest a homepage URL. The reply is not validated as a URL."""
        parts = [
            "Suggest the most appropriate website URL for a GitHub repository "
            "with these details:",
            "",
            f"Repository name: {context.name}",
            f"Full name: {context.full_name}",
            f"Primary language: {context.language}",
        ]
        if context.manifest:
            parts.append(f"Package name: {context.manifest.name}")
        parts.extend([
            "",
            "If this appears to be an npm package, suggest the npmjs.com URL.",
            "If it's a Python package, suggest PyPI URL.",
            "If it could have GitHub Pages, suggest that.",
            "Otherwise, suggest a reasonable documentation or project URL.",
            "",
            "Return ONLY the URL, nothing else.",
        ])

        return self._complete("\n".join(parts), max_tokens=100).strip()

    def generate_topics(self, context: RepositoryContext) -> list[str]:
        """Generate up to 10 normalized topic names."""
        parts = [
            "Generate 5-10 relevant GitHub topics (tags) for a repository "
            "with these details:",
            "",
            f"Repository name: {context.name}",
            f"Primary language: {context.language}",
            f"Current description: {context.description or 'None'}",
            f"Files in repository: {', '.join(context.files[:30])}",
        ]
        if context.manifest:
            parts.append(
                "Package.json dependencies: "
                f"{', '.join(context.manifest.dependencies[:10])}"
            )
        if context.config_file:
            parts.append(
                f"Config file ({context.config_file.name}): "
                f"{context.config_file.content[:300]}"
            )
        parts.extend([
            "",
            "Rules for topics:",
            "- All lowercase",
            "- Use hyphens instead of spaces",
            "- No special characters",
            "- Keep each topic under 50 characters",
            "- Include the primary programming language as a topic",
            "",
            "Return ONLY a comma-separated list of topics, nothing else.",
        ])

        return parse_topics(self._complete("\n".join(parts), max_tokens=150).strip())

    def generate_readme(self, context: RepositoryContext) -> str:
        """Generate README.md content as Markdown."""
        parts = [
            "Generate a professional README.md for a GitHub repository "
            "with these details:",
            "",
            f"Repository name: {context.name}",
            f"Full name: {context.full_name}",
            f"Primary language: {context.language}",
            f"Description: {context.description or 'A software project'}",
            f"Topics: {', '.join(context.topics) or 'None specified'}",
            f"Files in repository: {', '.join(context.files[:50])}",
        ]
        if context.manifest:
            package_info = {
                "name": context.manifest.name,
                "description": context.manifest.description,
                "scripts": context.manifest.scripts,
            }
            parts.append(f"Package.json: {json.dumps(package_info, indent=2)}")
        if context.config_file:
            parts.append(
                f"Config file ({context.config_file.name}): "
                f"{context.config_file.content[:500]}"
            )
        parts.extend([
            "",
            "Include these sections:",
            "1. Project title and description",
            "2. Features (based on the files and structure)",
            "3. Installation instructions",
            "4. Usage examples",
            "5. Contributing guidelines",
            "6. License section",
            "",
            "Make it professional and well-formatted with proper Markdown.",
        ])

        return self._complete("\n".join(parts), max_tokens=2000).strip()
