"""Tab completion of command names."""

from __future__ import annotations

import os
import sys

from .config import ShellState


def longest_common_prefix(strs: list[str]) -> str:
    """Return the longest string that starts every item of ``strs``."""
    return os.path.commonprefix(list(strs))


def find_command_matches(prefix: str, state: ShellState) -> list[str]:
    """Builtins and PATH entries whose names start with ``prefix``, sorted."""
    names = {name for name in state.builtin_names if name.startswith(prefix)}
    for directory in state.paths:
        try:
            entries = os.listdir(directory)
        except OSError:
            continue
        names.update(entry for entry in entries if entry.startswith(prefix))
    return sorted(names)


def _current_word(line: str, pos: int) -> str:
    head = line[:pos]
    if not head or head[-1].isspace():
        return ""
    return head.split()[-1]


class AutoCompleter:
    """Completes the word before the cursor to a command name.

    A unique match is completed with a trailing space; several matches are
    completed to their common prefix. When no progress can be made the
    first tab rings the bell and the second lists the matches.
    """

    def __init__(self, state: ShellState) -> None:
        self.state = state
        self.last_line = ""
        self.last_pos = 0
        self.tab_count = 0

    def _bell(self) -> None:
        sys.stderr.write("\a")
        sys.stderr.flush()

    def complete(self, line: str, pos: int) -> tuple[list[str], int]:
        """Return the suffixes to insert at ``pos`` and ``pos`` itself."""
        current = _current_word(line, pos)
        if current != self.last_line or pos != self.last_pos:
            self.last_line = current
            self.last_pos = pos
            self.tab_count = 0

        matches = find_command_matches(current, self.state)
        if not matches:
            self._bell()
            self.tab_count = 0
            return [], pos

        if len(matches) == 1:
            self.tab_count = 0
            return [matches[0][len(current):] + " "], pos

        prefix = longest_common_prefix(matches)
        if prefix == current:
            self.tab_count += 1
            if self.tab_count == 1:
                self._bell()
            else:
                listing = "".join(f"{match}  " for match in matches)
                sys.stdout.write(f"\n{listing}\n$ {current}")
                sys.stdout.flush()
                self.tab_count = 0
            return [], pos

        self.last_line = prefix
        self.tab_count = 0
        return [prefix[len(current):]], pos