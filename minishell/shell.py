"""The interactive read-eval loop of the shell."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from .commands import builtin_commands
from .completer import AutoCompleter
from .config import ShellState, default_paths
from .executor import execute, execute_pipeline
from .history import load_history_from_file
from .parser import parse_redirections, separate_command_args, setup_output

PROMPT = "$ "
READLINE_HISTORY_FILE = "/tmp/readline.tmp"


def make_state(environ: Mapping[str, str] | None = None) -> ShellState:
    """Create a shell state from the environment's PATH and HISTFILE."""
    if environ is None:
        environ = os.environ
    return ShellState(
        paths=default_paths(environ),
        commands=builtin_commands(),
        histfile=environ.get("HISTFILE", ""),
    )


def run_line(line: str, state: ShellState) -> None:
    """Record and run one command line."""
    line = line.strip()
    if not line:
        return
    state.history.append(line)

    if "|" in line:
        if not execute_pipeline(line, state):
            print("pipeline execution failed", file=sys.stderr)
        return

    command, args = separate_command_args(line)
    args, stdout_redir, stderr_redir = parse_redirections(args)
    try:
        out = setup_output(stdout_redir, stderr_redir)
    except OSError as exc:
        print("Redirection error:", exc, file=sys.stderr)
        return

    builtin = state.commands.get(command)
    if builtin is not None:
        try:
            builtin(args, out, state)
        finally:
            out.close()
        return

    if not execute(command, args, out, state):
        out.close()
        print(f"{command}: command not found", file=sys.stderr)


def _install_readline(state: ShellState):
    """Set up line editing and completion; return the readline module or None."""
    try:
        import readline
    except ImportError:
        return None

    completer = AutoCompleter(state)
    candidates: list[str] = []

    def complete(text: str, index: int) -> str | None:
        if index == 0:
            suffixes, _ = completer.complete(readline.get_line_buffer(), readline.get_endidx())
            candidates.clear()
            for suffix in suffixes:
                if suffix.endswith(" "):
                    # readline appends the space itself for a unique match
                    candidates.append(text + suffix.rstrip(" "))
                else:
                    # two candidates sharing the prefix keep readline from adding a space
                    candidates.extend([text + suffix, text + suffix + " "])
        return candidates[index] if index < len(candidates) else None

    readline.set_completer_delims(" \t\n")
    readline.set_completer(complete)
    readline.set_completion_display_matches_hook(lambda *_: None)
    readline.parse_and_bind("tab: complete")
    try:
        readline.read_history_file(READLINE_HISTORY_FILE)
    except OSError:
        pass
    return readline


def main(argv: list[str] | None = None) -> int:
    """Run the shell until end of input or an interrupt."""
    state = make_state()
    if state.histfile:
        load_history_from_file(state, state.histfile)

    interactive = sys.stdin.isatty()
    readline = _install_readline(state) if interactive else None
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                if interactive:
                    print("exit")
                break
            except KeyboardInterrupt:
                if interactive:
                    print("^C")
                break
            run_line(line, state)
    finally:
        if readline is not None:
            try:
                readline.write_history_file(READLINE_HISTORY_FILE)
            except OSError:
                pass
    return 0