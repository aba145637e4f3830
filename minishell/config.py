"""Shared shell state, output streams and redirection targets."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class Output:
    """Where a command writes its normal and error output.

    Streams the shell opened itself (redirection targets) are marked as
    owned and are closed by :meth:`close`; the process streams never are.
    """

    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)
    owns_stdout: bool = False
    owns_stderr: bool = False

    def close(self) -> None:
        """Close the streams this output owns."""
        if self.owns_stdout:
            self.stdout.close()
        if self.owns_stderr:
            self.stderr.close()


@dataclass(frozen=True)
class Redirection:
    """A file that a stream is redirected to, truncated or appended."""

    file: str
    append: bool = False


Builtin = Callable[[list, Output, "ShellState"], None]


def default_paths(environ: Mapping[str, str] | None = None) -> list[str]:
    """Split the PATH variable of ``environ`` into its directories."""
    if environ is None:
        environ = os.environ
    return environ.get("PATH", "").split(":")


@dataclass
class ShellState:
    """Everything a running shell keeps between command lines."""

    paths: list[str] = field(default_factory=list)
    commands: dict[str, Builtin] = field(default_factory=dict)
    history: list[str] = field(default_factory=list)
    history_append_index: int = 0
    histfile: str = ""

    @property
    def builtin_names(self) -> list[str]:
        """Names of the builtin commands, in registration order."""
        return list(self.commands)

    def is_builtin(self, name: str) -> bool:
        """Tell whether ``name`` is a builtin command."""
        return name in self.commands