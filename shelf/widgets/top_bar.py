from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.widgets import Label

from shelf.core.state import Mode, NavigatorState, NavigatorStateStore

MODE_LABELS = {
    Mode.BROWSE: "Browse",
    Mode.MOUNTS: "Devices",
    Mode.INPUT: "Input",
    Mode.VIEW: "View",
}


class TopBar(Container):
    """Custom application title bar."""

    current_path = reactive("", always_update=True)
    show_hidden = reactive(False)
    mode_label = reactive("Browse")
    staged = reactive("")

    def __init__(
        self,
        *,
        app_title: str | None,
        app_version: str,
        state_store: NavigatorStateStore,
    ) -> None:
        super().__init__()
        self._state_store = state_store
        self._state_subscription = self._handle_state_update

        self.title_label = Horizontal(
            Label(
                f"{app_title}",
                id="topbar_app_name",
            ),
            Label(
                f"v{app_version}",
                id="topbar_app_version",
            ),
            id="app_meta_container",
        )
        self.path_label = Label("", id="topbar_path")
        self.staged_label = Label("", id="topbar_staged")

    def on_mount(self) -> None:
        self._state_store.subscribe(self._state_subscription)

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    def watch_current_path(self) -> None:
        self._update_path()

    def watch_show_hidden(self) -> None:
        self._update_path()

    def watch_mode_label(self) -> None:
        self._update_path()

    def watch_staged(self) -> None:
        self.staged_label.update(f"[$text-accent]{escape(self.staged)}[/]" if self.staged else "")

    def _update_path(self) -> None:
        if not self.current_path:
            self.path_label.update("")
            return
        hidden = " [dim](hidden)[/dim]" if self.show_hidden else ""
        self.path_label.update(
            f"[dim]{self.mode_label} - [/dim]{escape(self.current_path)}{hidden}"
        )

    def _handle_state_update(self, state: NavigatorState) -> None:
        self.current_path = str(state.current_directory)
        self.show_hidden = state.show_hidden
        self.mode_label = MODE_LABELS[state.mode]

    def compose(self) -> ComposeResult:
        yield self.title_label
        yield self.path_label
        yield self.staged_label
