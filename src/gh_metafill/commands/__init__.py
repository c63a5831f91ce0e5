"""CLI commands for gh-metafill."""
