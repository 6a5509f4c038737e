"""Detail screen for a single category."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ..models.category import Category

_DETAIL_FIELDS = [
    ("Category", "display_name"),
    ("List name", "list_name"),
    ("Key", "key"),
]

_METADATA_LABELS = {
    "updated": "Updated",
    "oldest_published_date": "Oldest list",
    "newest_published_date": "Newest list",
}


class CategoryDetailScreen(Screen):
    """Shows one category; escape returns to the list."""

    CSS = """
    #category-detail {
        padding: 1 2;
    }

    .detail-row {
        height: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "app.pop_screen", "Back"),
    ]

    def __init__(self, category: Category):
        super().__init__()
        self.category = category

    def detail_rows(self) -> list[tuple[str, str]]:
        rows = [(label, str(getattr(self.category, attr))) for label, attr in _DETAIL_FIELDS]
        for key, label in _METADATA_LABELS.items():
            value = self.category.metadata.get(key)
            if value:
                rows.append((label, str(value)))
        return rows

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="category-detail"):
            for label, value in self.detail_rows():
                yield Static(f"{label}: {value}", classes="detail-row", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.category.display_name
