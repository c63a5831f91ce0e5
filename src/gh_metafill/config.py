"""Runtime settings for gh-metafill."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Prompt

from gh_metafill.core.metadata_generator import DEFAULT_MODEL

console = Console()

GITHUB_TOKEN_VAR = "GITHUB_TOKEN"
ANTHROPIC_KEY_VAR = "ANTHROPIC_API_KEY"
MODEL_VAR = "GH_METAFILL_MODEL"


@dataclass(frozen=True)
class Settings:
    """Secrets and options resolved once at startup."""

    github_token: str
    anthropic_api_key: str
    model: str = DEFAULT_MODEL


def _resolve_secret(var: str, label: str, prompt: str, output: Console) -> str:
    value = os.environ.get(var)
    if value:
        output.print(f"[green]✓[/green] {label} loaded from environment")
        return value
    return Prompt.ask(prompt, password=True, console=output)


def load_settings(output: Console | None = None) -> Settings:
    """Resolve settings from the environment, a .env file, or masked prompts.

    Variables already set in the environment win over .env entries.
    """
    output = output or console
    load_dotenv(override=False)

    github_token = _resolve_secret(
        GITHUB_TOKEN_VAR,
        "GitHub token",
        "Enter your GitHub Personal Access Token",
        output,
    )
    anthropic_api_key = _resolve_secret(
        ANTHROPIC_KEY_VAR,
        "Anthropic API key",
        "Enter your Anthropic API Key",
        output,
    )

    return Settings(
        github_token=github_token,
        anthropic_api_key=anthropic_api_key,
        model=os.environ.get(MODEL_VAR) or DEFAULT_MODEL,
    )
