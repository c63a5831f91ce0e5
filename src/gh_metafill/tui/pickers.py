"""Full-screen pickers for choosing a repository and the fields to generate."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import (
    Button,
    Footer,
    Input,
    Label,
    ListItem,
    ListView,
    SelectionList,
    Static,
)
from textual.widgets.selection_list import Selection

from gh_metafill.core.models import ALL_FIELDS, FIELD_LABELS, RepositorySummary
from gh_metafill.core.repo_selector import filter_repositories


def format_repo_choice(repo: RepositorySummary) -> str:
    """Format a repository as one aligned line of the search list."""
    name = repo.name if len(repo.name) <= 27 else repo.name[:26] + "…"
    language = repo.language or "—"
    visibility = "●" if repo.private else "○"

    if repo.description:
        description = repo.description[:40]
        if len(repo.description) > 40:
            description += "…"
    else:
        description = "No description"

    return (
        f"{visibility} {name:<28} {language:<12} "
        f"★{repo.stars:>4} ⑂{repo.forks:>4}  │ {description}"
    )


class RepoListItem(ListItem):
    """A list item representing a repository."""

    def __init__(self, repo: RepositorySummary) -> None:
        super().__init__()
        self.repo = repo

    def compose(self) -> ComposeResult:
        yield Label(format_repo_choice(self.repo), markup=False)


class RepoSearchApp(App[RepositorySummary]):
    """Search box over the repository list; Enter picks the highlighted repo."""

    TITLE = "gh-metafill"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
    ]

    def __init__(self, repos: list[RepositorySummary]) -> None:
        super().__init__()
        self._repos = repos
        self._filtered: list[RepositorySummary] = []

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("Search and select a repository", classes="screen-title"),
            Static(
                "Type to search by name, language, or description",
                classes="hint",
            ),
            Input(placeholder="Search repositories...", id="search-input", classes="search-input"),
            Static("", id="stats-bar", classes="stats-bar"),
            ListView(id="repo-list", classes="repo-list"),
        )
        yield Footer()

    async def on_mount(self) -> None:
        await self._filter("")
        self.query_one("#search-input", Input).focus()

    async def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter on every keystroke."""
        if event.input.id == "search-input":
            await self._filter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Pick the highlighted repository."""
        if event.input.id != "search-input":
            return
        list_view = self.query_one("#repo-list", ListView)
        item = list_view.highlighted_child
        if isinstance(item, RepoListItem):
            self.exit(item.repo)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, RepoListItem):
            self.exit(event.item.repo)

    def action_cursor_down(self) -> None:
        self.query_one("#repo-list", ListView).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#repo-list", ListView).action_cursor_up()

    async def _filter(self, query: str) -> None:
        list_view = self.query_one("#repo-list", ListView)
        await list_view.clear()

        self._filtered = filter_repositories(self._repos, query)
        await list_view.extend(RepoListItem(repo) for repo in self._filtered)
        if self._filtered:
            list_view.index = 0

        stats_bar = self.query_one("#stats-bar", Static)
        stats_bar.update(f"{len(self._filtered)}/{len(self._repos)} repos")


class FieldChecklistApp(App[list[str]]):
    """Checkbox list of metadata fields, missing ones preselected."""

    TITLE = "gh-metafill"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("ctrl+s", "submit", "Continue"),
    ]

    def __init__(self, missing: list[str]) -> None:
        super().__init__()
        self.missing = missing

    def compose(self) -> ComposeResult:
        selections = [
            Selection(FIELD_LABELS[key], key, key in self.missing)
            for key in ALL_FIELDS
        ]
        yield Vertical(
            Static("Select which fields to generate", classes="screen-title"),
            Static("Space toggles a field, Ctrl+S continues", classes="hint"),
            SelectionList[str](*selections, id="field-list", classes="field-list"),
            Horizontal(
                Button("Continue", variant="primary", id="btn-continue"),
                classes="buttons",
            ),
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#field-list", SelectionList).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-continue":
            self.action_submit()

    def action_submit(self) -> None:
        selected = set(self.query_one("#field-list", SelectionList).selected)
        self.exit([key for key in ALL_FIELDS if key in selected])


def search_repository(repos: list[RepositorySummary]) -> RepositorySummary | None:
    """Let the user pick one repository. Returns None if the app was quit."""
    return RepoSearchApp(repos).run()


def choose_fields(missing: list[str]) -> list[str]:
    """Let the user tick the fields to generate, in display order."""
    return FieldChecklistApp(missing).run() or []
