"""Core functionality for gh-metafill."""
