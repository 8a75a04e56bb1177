from __future__ import annotations

from pathlib import Path
from typing import Callable

from shelf.core.clipboard import ClipboardController, ClipboardMode, PasteReport
from shelf.core.errors import ShelfError, format_error, wrap_error
from shelf.core.events import Action, InputEvent
from shelf.core.fs_controller import FileSystemController
from shelf.core.logging import get_logger, log_event
from shelf.core.selection import SelectionSet
from shelf.core.state import Mode, NavigatorState, NavigatorStateStore, StatusLine
from shelf.core.text_entry import TextEntryController, TextEntryState, TextEntryTarget
from shelf.services.content_viewer import ContentViewer, ViewedFile
from shelf.services.file_listing import EntryCatalog, FileListingEntry
from shelf.services.mounts import MountController, MountEntry

logger = get_logger(__name__)


class NavigatorDispatcher:
    """Mode state machine that routes input events to the file-browser components.

    Every handled event leaves the catalog consistent with the filesystem:
    mutations are followed by a refresh, and failures are published as the
    transient status line instead of being raised.
    """

    def __init__(
        self,
        *,
        store: NavigatorStateStore,
        launch_editor: Callable[[Path], None],
        request_quit: Callable[[], None],
        fs_controller: FileSystemController | None = None,
        catalog: EntryCatalog | None = None,
        selection: SelectionSet | None = None,
        clipboard: ClipboardController | None = None,
        text_entry: TextEntryController | None = None,
        viewer: ContentViewer | None = None,
        mounts: MountController | None = None,
    ) -> None:
        self._store = store
        self._launch_editor = launch_editor
        self._request_quit = request_quit
        self._fs = fs_controller or FileSystemController()
        self.catalog = catalog or EntryCatalog()
        self.selection = selection or SelectionSet()
        self.clipboard = clipboard or ClipboardController(self._fs)
        self.text_entry = text_entry or TextEntryController(self._fs)
        self.viewer = viewer or ContentViewer()
        self.mounts = mounts or MountController()

        self.entries: list[FileListingEntry] = []
        self.mount_entries: list[MountEntry] = []
        self.text_entry_state: TextEntryState | None = None
        self.viewed: ViewedFile | None = None

        self._handlers: dict[Mode, Callable[[InputEvent], None]] = {
            Mode.BROWSE: self._handle_browse,
            Mode.MOUNTS: self._handle_mounts,
            Mode.INPUT: self._handle_input,
            Mode.VIEW: self._handle_view,
        }

    @property
    def state(self) -> NavigatorState:
        return self._store.state

    @property
    def mode(self) -> Mode:
        return self._store.state.mode

    @property
    def current_directory(self) -> Path:
        return self._store.state.current_directory

    def dispatch(self, event: InputEvent) -> None:
        self._store.set_status(None)
        self._handlers[self.mode](event)

    def refresh(self) -> None:
        """Re-list the current directory, keeping the old rows if it cannot be read."""
        result = self.catalog.list(self.current_directory, show_hidden=self.state.show_hidden)
        if result.error is not None:
            self._report(
                ShelfError(
                    code="list_failed",
                    message=f"Unable to read {self.current_directory}",
                    detail=result.error,
                )
            )
        else:
            self.entries = result.entries
        self._store.bump_listing_token()

    # Browse

    def _handle_browse(self, event: InputEvent) -> None:
        action = event.action
        if action is Action.QUIT:
            self._request_quit()
        elif action is Action.TOGGLE_HIDDEN:
            self._store.set_show_hidden(not self.state.show_hidden)
            self.refresh()
        elif action is Action.YANK:
            self._stage(ClipboardMode.COPY)
        elif action is Action.CUT:
            self._stage(ClipboardMode.CUT)
        elif action is Action.PASTE:
            self._paste()
        elif action is Action.NEW:
            self.text_entry_state = self.text_entry.begin_create()
            self._store.set_mode(Mode.INPUT)
        elif action is Action.MOUNT_MENU:
            self._enumerate_mounts()
            self._store.set_mode(Mode.MOUNTS)
        else:
            entry = event.item
            if not isinstance(entry, FileListingEntry):
                return
            if action is Action.ENTER:
                self._activate(entry)
            elif action is Action.MARK:
                self._toggle_mark(entry)
            elif action is Action.RENAME:
                self._begin_rename(entry)
            elif action is Action.DELETE:
                self._delete(entry)
            elif action is Action.VIEW:
                self._view(entry)

    def _activate(self, entry: FileListingEntry) -> None:
        if entry.is_dir:
            self._change_directory(entry.path)
            return
        try:
            self._launch_editor(entry.path)
        except ShelfError as exc:
            self._report(exc)
        self.refresh()

    def _change_directory(self, path: Path) -> bool:
        result = self.catalog.list(path, show_hidden=self.state.show_hidden)
        if result.error is not None:
            self._report(
                ShelfError(code="list_failed", message=f"Unable to open {path}", detail=result.error)
            )
            return False
        self._store.set_current_directory(path)
        self.entries = result.entries
        self._store.bump_listing_token()
        return True

    def _toggle_mark(self, entry: FileListingEntry) -> None:
        if entry.is_parent_link:
            return
        self.selection.toggle(entry.path)
        self.refresh()

    def _stage(self, mode: ClipboardMode) -> None:
        snapshot = self.selection.snapshot()
        if mode is ClipboardMode.COPY:
            self.clipboard.yank(snapshot)
            verb = "Yanked"
        else:
            self.clipboard.cut(snapshot)
            verb = "Cut"
        self.selection.clear()
        if snapshot:
            self._store.set_status(StatusLine(f"{verb} {len(snapshot)} item(s)"))
        self.refresh()

    def _paste(self) -> None:
        staged = self.clipboard.state.paths
        try:
            report = self.clipboard.paste(self.current_directory)
        except ShelfError as exc:
            self._report(exc)
        else:
            if report.mode is ClipboardMode.CUT:
                for source in staged:
                    if not source.exists():
                        self.selection.discard(source)
            self._summarize_paste(report)
        self.refresh()

    def _summarize_paste(self, report: PasteReport) -> None:
        pasted = len(report.pasted)
        if not report.failures:
            self._store.set_status(StatusLine(f"Pasted {pasted} item(s)"))
            return
        first = report.failures[0]
        message, _severity = format_error(first.error)
        severity = "warning" if pasted else "error"
        self._store.set_status(
            StatusLine(f"Pasted {pasted} of {report.attempted} item(s): {message}", severity)
        )
        for failure in report.failures:
            log_event(logger, "operation_failed", code=failure.error.code, detail=str(failure.error))

    def _begin_rename(self, entry: FileListingEntry) -> None:
        if entry.is_parent_link:
            return
        self.text_entry_state = self.text_entry.begin_rename(entry)
        self._store.set_mode(Mode.INPUT)

    def _delete(self, entry: FileListingEntry) -> None:
        if entry.is_parent_link:
            return
        try:
            self._fs.delete_path(entry.path)
        except FileNotFoundError:
            self.selection.discard(entry.path)
        except OSError as exc:
            self._report(wrap_error(exc, code="delete_failed", message=f"Unable to delete '{entry.name}'"))
        else:
            self.selection.discard(entry.path)
            log_event(logger, "delete", path=str(entry.path))
        self.refresh()

    def _view(self, entry: FileListingEntry) -> None:
        if entry.is_parent_link or entry.is_dir:
            return
        try:
            self.viewed = self.viewer.load(entry.path)
        except OSError as exc:
            self._report(wrap_error(exc, code="view_failed", message=f"Unable to open '{entry.name}'"))
            return
        self._store.set_mode(Mode.VIEW)

    # Mounts

    def _handle_mounts(self, event: InputEvent) -> None:
        action = event.action
        if action is Action.BACK:
            self.mount_entries = []
            self._store.set_mode(Mode.BROWSE)
            return
        device = event.item
        if not isinstance(device, MountEntry):
            return
        if action is Action.ENTER:
            if not device.is_mounted:
                self._mount_request(self.mounts.mount, device)
            elif self._change_directory(Path(device.mount_point)):
                self.mount_entries = []
                self._store.set_mode(Mode.BROWSE)
        elif action is Action.UNMOUNT:
            if not device.is_mounted:
                self._store.set_status(StatusLine(f"{device.device} is not mounted"))
                return
            self._mount_request(self.mounts.unmount, device)

    def _mount_request(self, request: Callable[[str], None], device: MountEntry) -> None:
        try:
            request(device.device)
        except ShelfError as exc:
            self._report(exc)
        self._enumerate_mounts()

    def _enumerate_mounts(self) -> None:
        try:
            self.mount_entries = self.mounts.enumerate()
        except ShelfError as exc:
            self.mount_entries = []
            self._report(exc)
        self._store.bump_listing_token()

    # Input

    def _handle_input(self, event: InputEvent) -> None:
        if event.action is Action.BACK:
            self.text_entry_state = None
            self._store.set_mode(Mode.BROWSE)
        elif event.action is Action.COMMIT:
            state = self.text_entry_state
            self.text_entry_state = None
            self._store.set_mode(Mode.BROWSE)
            if state is not None:
                self._commit_text(state, event.text)
            self.refresh()

    def _commit_text(self, state: TextEntryState, buffer: str) -> None:
        try:
            result = self.text_entry.commit(state, buffer, self.current_directory)
        except ShelfError as exc:
            self._report(exc)
            return
        if result is not None and state.target is TextEntryTarget.RENAME and state.entry:
            self.selection.discard(state.entry.path)

    # View

    def _handle_view(self, event: InputEvent) -> None:
        if event.action in (Action.BACK, Action.QUIT):
            self.viewed = None
            self._store.set_mode(Mode.BROWSE)

    def _report(self, error: ShelfError) -> None:
        message, severity = format_error(error)
        log_event(logger, "operation_failed", code=error.code, detail=str(error))
        self._store.set_status(StatusLine(message, severity))
