"""Editor launch helper, the default "open the item" action.

Runs ``$EDITOR`` on a file or directory. Returns an error message string
instead of raising so the menu can show it.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path


def launch_editor(target: Path) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot open: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot open: $EDITOR is empty."

    try:
        subprocess.run([*cmd, str(target)], check=False)
    except Exception as exc:
        return f"Failed to launch editor: {exc}"
    return None
