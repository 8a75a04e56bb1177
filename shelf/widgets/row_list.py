from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.binding import Binding
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from shelf.domain.rows import FileRow, MountRow, Row, row_item
from shelf.services.file_listing import FileListingEntry
from shelf.services.mounts import MountEntry


def _truncate_row_value(value: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 3:
        return value[:width]
    return f"{value[: width - 3]}..."


class RowList(OptionList):
    """Selectable list of file or mount rows with an optional title filter."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    TITLE_MAX = 120

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._all_rows: list[Row] = []
        self._visible_rows: list[Row] = []
        self._filter_query = ""

    @property
    def filter_query(self) -> str:
        return self._filter_query

    @property
    def visible_rows(self) -> list[Row]:
        return list(self._visible_rows)

    @property
    def selected_item(self) -> FileListingEntry | MountEntry | None:
        index = self.highlighted
        if index is None or not 0 <= index < len(self._visible_rows):
            return None
        return row_item(self._visible_rows[index])

    def show_rows(self, rows: Sequence[Row]) -> None:
        self._all_rows = list(rows)
        self._render_rows()

    def set_filter(self, query: str) -> None:
        if query == self._filter_query:
            return
        self._filter_query = query
        self._render_rows()

    def _render_rows(self) -> None:
        previous = self.selected_item
        previous_index = self.highlighted
        needle = self._filter_query.casefold()
        self._visible_rows = [
            row for row in self._all_rows if needle in row.title().casefold()
        ]
        self.clear_options()
        self.add_options([Option(self._row_prompt(row)) for row in self._visible_rows])
        if not self._visible_rows:
            self.highlighted = None
            return
        for index, row in enumerate(self._visible_rows):
            if row_item(row) == previous:
                self.highlighted = index
                return
        if previous_index is None:
            self.highlighted = 0
        else:
            self.highlighted = min(previous_index, len(self._visible_rows) - 1)

    def _row_prompt(self, row: Row) -> Text:
        text = Text()
        marked = isinstance(row, FileRow) and row.marked
        text.append("✓ " if marked else "  ", style="bold")
        title_style = "bold"
        if isinstance(row, FileRow) and row.entry.is_dir:
            title_style = "bold cyan"
        elif isinstance(row, MountRow) and row.mount.is_mounted:
            title_style = "bold green"
        text.append(_truncate_row_value(row.title(), self.TITLE_MAX), style=title_style)
        text.append("\n  ")
        text.append(row.description(), style="dim")
        return text
