from .row_list import RowList
from .top_bar import TopBar
from .preview import FilePreview
from .prompts import EntryPrompt, FilterInput

__all__ = [
    "RowList",
    "TopBar",
    "FilePreview",
    "EntryPrompt",
    "FilterInput",
]
