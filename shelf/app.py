from __future__ import annotations

import subprocess
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.containers import Vertical
from textual.theme import Theme
from textual.widgets import Footer, Input, OptionList

from shelf import __version__
from shelf.core.clipboard import ClipboardMode
from shelf.core.config import RuntimeConfig, get_runtime_config
from shelf.core.dispatcher import NavigatorDispatcher
from shelf.core.errors import ShelfError, wrap_error
from shelf.core.events import Action, InputEvent
from shelf.core.logging import configure_logging, get_logger, log_event
from shelf.core.notify import NotifyTimeouts
from shelf.core.paths import user_settings_path
from shelf.core.settings_store import SettingsStore
from shelf.core.state import Mode, NavigatorState, NavigatorStateStore, StatusLine
from shelf.core.text_entry import TextEntryTarget
from shelf.domain.rows import FileRow, MountRow
from shelf.services.editor import build_editor_command
from shelf.services.file_listing import FileListingEntry
from shelf.services.mounts import MountController, MountEntry
from shelf.widgets import EntryPrompt, FilePreview, FilterInput, RowList, TopBar

logger = get_logger(__name__)

MODE_ACTIONS: dict[Mode, frozenset[Action]] = {
    Mode.BROWSE: frozenset(
        {
            Action.QUIT,
            Action.MARK,
            Action.YANK,
            Action.CUT,
            Action.PASTE,
            Action.NEW,
            Action.RENAME,
            Action.DELETE,
            Action.VIEW,
            Action.MOUNT_MENU,
            Action.TOGGLE_HIDDEN,
        }
    ),
    Mode.MOUNTS: frozenset({Action.UNMOUNT, Action.BACK}),
    Mode.INPUT: frozenset({Action.BACK}),
    Mode.VIEW: frozenset({Action.BACK, Action.QUIT}),
}


class Shelf(App):
    TITLE = "shelf"
    CSS_PATH = Path(__file__).parent / "styles" / "index.tcss"

    BINDINGS = [
        Binding("space", "dispatch('mark')", "Mark", show=True),
        Binding("y", "dispatch('yank')", "Yank", show=True),
        Binding("x", "dispatch('cut')", "Cut", show=True),
        Binding("p", "dispatch('paste')", "Paste", show=True),
        Binding("i", "dispatch('new')", "New", show=True),
        Binding("r", "dispatch('rename')", "Rename", show=True),
        Binding("d", "dispatch('delete')", "Delete", show=True),
        Binding("v", "dispatch('view')", "View", show=True),
        Binding("m", "dispatch('mount_menu')", "Devices", show=True),
        Binding("h", "dispatch('toggle_hidden')", "Hidden", show=True),
        Binding("slash", "filter_entries", "Filter", key_display="/", show=True),
        Binding("u", "dispatch('unmount')", "Unmount", show=True),
        Binding("escape", "dispatch('back')", "Back", show=True),
        Binding("q", "dispatch('quit')", "Quit", show=True),
    ]

    def __init__(
        self,
        start_path: Path | None = None,
        *,
        config: RuntimeConfig | None = None,
        settings_store: SettingsStore | None = None,
    ) -> None:
        super().__init__()
        self.config = config or get_runtime_config()
        self.notify_timeouts = NotifyTimeouts()
        self.settings_store = settings_store or SettingsStore(user_settings_path())
        self.settings = self.settings_store.load()
        self.state_store = NavigatorStateStore(
            NavigatorState(current_directory=(start_path or Path.cwd()).absolute())
        )
        self.dispatcher = NavigatorDispatcher(
            store=self.state_store,
            launch_editor=self._launch_editor,
            request_quit=self.exit,
            mounts=MountController(
                device_list_tool=self.config.device_list_tool,
                mount_tool=self.config.mount_tool,
            ),
        )
        self._rendered_mode: Mode | None = None
        self._rendered_token = -1
        self._rendered_directory: Path | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="app_main_container"):
            yield TopBar(
                app_title=Shelf.TITLE,
                app_version=__version__,
                state_store=self.state_store,
            )
            yield FilterInput(placeholder="Filter", id="browse_filter")
            yield RowList(id="browse_list")
            yield RowList(id="mount_list")
            yield EntryPrompt(id="entry_prompt")
            yield FilePreview(id="file_preview")
        yield Footer()

    def on_mount(self) -> None:
        self.console.set_window_title("shelf")
        theme = self.settings.get("userPreferences", {}).get("theme", "textual-dark")
        if theme in self.available_themes:
            self.theme = theme
        self.theme_changed_signal.subscribe(self, self.on_theme_changed)
        self.query_one("#browse_filter", FilterInput).display = False
        self.state_store.subscribe(self._handle_state_update)
        self.dispatcher.refresh()
        self._sync_view()

    def on_theme_changed(self, theme: Theme) -> None:
        self.settings_store.update_theme(self.settings, theme.name)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        mode = self.dispatcher.mode
        if action == "dispatch" and parameters:
            try:
                requested = Action(str(parameters[0]))
            except ValueError:
                return False
            return requested in MODE_ACTIONS[mode]
        if action == "filter_entries":
            return mode is Mode.BROWSE
        return True

    def action_dispatch(self, name: str) -> None:
        action = Action(name)
        self._dispatch(InputEvent(action, self._highlighted_item()))

    def action_filter_entries(self) -> None:
        filter_input = self.query_one("#browse_filter", FilterInput)
        filter_input.display = True
        filter_input.focus()

    @on(OptionList.OptionSelected)
    def handle_option_selected(self, event: OptionList.OptionSelected) -> None:
        row_list = event.option_list
        if not isinstance(row_list, RowList):
            return
        self._dispatch(InputEvent(Action.ENTER, row_list.selected_item))

    @on(Input.Submitted, "#entry_input")
    def handle_entry_submitted(self, event: Input.Submitted) -> None:
        self._dispatch(InputEvent(Action.COMMIT, text=event.value))

    @on(Input.Changed, "#browse_filter")
    def handle_filter_changed(self, event: Input.Changed) -> None:
        self.query_one("#browse_list", RowList).set_filter(event.value)

    @on(Input.Submitted, "#browse_filter")
    def handle_filter_submitted(self, _: Input.Submitted) -> None:
        self.query_one("#browse_list", RowList).focus()

    @on(FilterInput.Closed)
    def handle_filter_closed(self, _: FilterInput.Closed) -> None:
        self.query_one("#browse_filter", FilterInput).display = False
        browse_list = self.query_one("#browse_list", RowList)
        browse_list.set_filter("")
        browse_list.focus()

    def _dispatch(self, event: InputEvent) -> None:
        self.dispatcher.dispatch(event)
        if self.is_running:
            self._sync_view()

    def _highlighted_item(self) -> FileListingEntry | MountEntry | None:
        mode = self.dispatcher.mode
        if mode is Mode.BROWSE:
            return self.query_one("#browse_list", RowList).selected_item
        if mode is Mode.MOUNTS:
            return self.query_one("#mount_list", RowList).selected_item
        return None

    def _handle_state_update(self, state: NavigatorState) -> None:
        status = state.status
        if status is not None:
            self._show_status(status)

    def _show_status(self, status: StatusLine) -> None:
        timeout = (
            self.notify_timeouts.long
            if status.severity == "error"
            else self.notify_timeouts.normal
        )
        self.notify(status.message, severity=status.severity, timeout=timeout)

    def _sync_view(self) -> None:
        dispatcher = self.dispatcher
        mode = dispatcher.mode
        token = dispatcher.state.listing_token
        browse_list = self.query_one("#browse_list", RowList)
        mount_list = self.query_one("#mount_list", RowList)
        prompt = self.query_one("#entry_prompt", EntryPrompt)
        preview = self.query_one("#file_preview", FilePreview)
        filter_input = self.query_one("#browse_filter", FilterInput)

        if token != self._rendered_token:
            browse_list.show_rows(
                [FileRow(entry, entry.path in dispatcher.selection) for entry in dispatcher.entries]
            )
            mount_list.show_rows([MountRow(mount) for mount in dispatcher.mount_entries])
            self._rendered_token = token
            if dispatcher.current_directory != self._rendered_directory:
                self._rendered_directory = dispatcher.current_directory
                browse_list.set_filter("")
                filter_input.value = ""
                filter_input.display = False
                browse_list.highlighted = 0 if dispatcher.entries else None
        self.query_one(TopBar).staged = self._staged_summary()

        if mode is self._rendered_mode:
            return
        self._rendered_mode = mode
        browse_list.display = mode is Mode.BROWSE
        filter_input.display = mode is Mode.BROWSE and bool(browse_list.filter_query)
        mount_list.display = mode is Mode.MOUNTS
        prompt.display = mode is Mode.INPUT
        preview.display = mode is Mode.VIEW

        if mode is Mode.BROWSE:
            browse_list.focus()
        elif mode is Mode.MOUNTS:
            mount_list.highlighted = 0 if dispatcher.mount_entries else None
            mount_list.focus()
        elif mode is Mode.INPUT:
            state = dispatcher.text_entry_state
            if state is not None and state.target is TextEntryTarget.RENAME:
                prompt.begin("Rename to", state.buffer)
            else:
                prompt.begin("New file, or folder/ with a trailing slash", "")
        elif mode is Mode.VIEW and dispatcher.viewed is not None:
            preview.show_text(dispatcher.viewed.path.name, dispatcher.viewed.text)
            preview.focus()
        self.refresh_bindings()

    def _staged_summary(self) -> str:
        parts: list[str] = []
        marked = len(self.dispatcher.selection)
        if marked:
            parts.append(f"Marked: {marked}")
        clipboard = self.dispatcher.clipboard.state
        if clipboard.mode is not ClipboardMode.NONE and clipboard.paths:
            parts.append(f"Staged: {len(clipboard.paths)} {clipboard.mode.name.lower()}")
        return " | ".join(parts)

    def _launch_editor(self, path: Path) -> None:
        command = build_editor_command(self.config.editor, path)
        try:
            with self.suspend():
                completed = subprocess.run(command, check=False)
        except SuspendNotSupported as exc:
            raise ShelfError(
                code="editor_failed",
                message="Unable to hand the terminal to the editor",
                detail=str(exc),
            ) from exc
        except OSError as exc:
            raise wrap_error(
                exc, code="editor_failed", message=f"Unable to launch {command[0]}"
            ) from exc
        log_event(logger, "editor_exit", path=str(path), returncode=completed.returncode)


def main(start_path: Path | None = None) -> None:
    config = get_runtime_config()
    configure_logging(config)
    Shelf(start_path, config=config).run()
