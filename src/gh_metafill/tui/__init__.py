"""Interactive pickers for gh-metafill.

Built on textual: a searchable repository list and a field checklist.
"""

from gh_metafill.tui.pickers import choose_fields, search_repository

__all__ = ["choose_fields", "search_repository"]
