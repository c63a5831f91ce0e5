"""gh-metafill: backfill missing GitHub repository metadata with an LLM."""

__version__ = "0.1.0"
