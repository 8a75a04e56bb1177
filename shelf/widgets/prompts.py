from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Input, Label


class EntryPrompt(Vertical):
    """Inline text capture for new and renamed entries."""

    def compose(self):
        yield Label("", id="entry_prompt_message")
        yield Input(placeholder="new-file.txt or folder/", id="entry_input")

    def begin(self, message: str, value: str) -> None:
        self.query_one("#entry_prompt_message", Label).update(message)
        field = self.query_one("#entry_input", Input)
        field.value = value
        field.cursor_position = len(value)
        field.focus()


class FilterInput(Input):
    """Title filter for the browse list; escape clears and closes it."""

    BINDINGS = [
        Binding("escape", "close", "Close filter", show=False),
    ]

    class Closed(Message):
        pass

    def action_close(self) -> None:
        self.value = ""
        self.post_message(self.Closed())
