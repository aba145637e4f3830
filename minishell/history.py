"""Persisting the command history to a file."""

from __future__ import annotations

from .config import ShellState


def write_history_to_file(state: ShellState) -> None:
    """Write the whole history to the state's history file, if one is set.

    Failures to write are ignored.
    """
    if not state.histfile:
        return
    try:
        with open(state.histfile, "w", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in state.history)
    except OSError:
        return


def load_history_from_file(state: ShellState, path: str) -> None:
    """Append the non-blank lines of ``path`` to the history.

    Marks everything loaded as already appended. A missing or unreadable
    file is ignored.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except OSError:
        return
    state.history.extend(line for line in lines if line.strip())
    state.history_append_index = len(state.history)