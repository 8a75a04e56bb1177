from __future__ import annotations

import shlex
from pathlib import Path


def build_editor_command(editor: str, path: Path) -> list[str]:
    try:
        tokens = shlex.split(editor)
    except ValueError:
        tokens = editor.split()
    if not tokens:
        tokens = ["vi"]
    return [*tokens, str(path)]
