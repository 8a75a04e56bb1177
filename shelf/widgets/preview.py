from rich.text import Text
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Static


class FilePreview(VerticalScroll):
    """Scrollable, read-only view of a file's text."""

    BINDINGS = [
        Binding("j", "scroll_down", "Scroll down", show=False),
        Binding("k", "scroll_up", "Scroll up", show=False),
    ]

    def compose(self):
        yield Static("", id="preview_content")

    def show_text(self, title: str, content: str) -> None:
        self.border_title = title
        self.query_one("#preview_content", Static).update(Text(content))
        self.scroll_home(animate=False)
