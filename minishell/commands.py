"""The builtin commands of the shell."""

from __future__ import annotations

import os
import re

from .config import Builtin, Output, ShellState
from .executor import find_executable
from .history import write_history_to_file

_INTEGER = re.compile(r"[+-]?\d+")


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"parsing {text!r}: invalid syntax")
    return int(text)


def cmd_exit(args: list[str], out: Output, state: ShellState) -> None:
    """Save the history and leave the shell with the given status."""
    if len(args) > 1:
        print("Error: expected zero or one argument", file=out.stderr)
        return
    status = 0
    if args:
        try:
            status = _parse_int(args[0])
        except ValueError as exc:
            print("Invalid number:", exc, file=out.stderr)
            return
    write_history_to_file(state)
    raise SystemExit(status)


def cmd_echo(args: list[str], out: Output, state: ShellState) -> None:
    """Print the arguments separated by single spaces."""
    try:
        print(" ".join(args), file=out.stdout)
    except OSError as exc:
        print("Error writing to stdout:", exc, file=out.stderr)


def cmd_type(args: list[str], out: Output, state: ShellState) -> None:
    """Tell whether a name is a builtin, an executable on PATH, or neither."""
    if not args:
        return
    name = args[0]
    if state.is_builtin(name):
        text = f"{name} is a shell builtin"
    else:
        full_path = find_executable(name, state.paths)
        text = f"{name} is {full_path}" if full_path else f"{name}: not found"
    try:
        print(text, file=out.stdout)
    except OSError as exc:
        print("Error writing to stdout:", exc, file=out.stderr)


def cmd_pwd(args: list[str], out: Output, state: ShellState) -> None:
    """Print the current working directory."""
    try:
        directory = os.getcwd()
    except OSError as exc:
        print("Error writing to stdout:", exc, file=out.stderr)
        return
    print(directory, file=out.stdout)


def _home() -> str:
    return os.environ.get("HOME", "")


def cmd_cd(args: list[str], out: Output, state: ShellState) -> None:
    """Change directory: to HOME, to the previous directory with ``-``, or to a path."""
    try:
        current = os.getcwd()
    except OSError as exc:
        print("cd: failed to get current directory:", exc, file=out.stderr)
        return

    if not args:
        target = _home()
        if not target:
            print("cd: HOME not set", file=out.stderr)
            return
    elif args[0] == "-":
        target = getattr(state, "last_dir", "")
        if not target:
            print("cd: OLDPWD not set", file=out.stderr)
            return
        print(target, file=out.stdout)
    elif args[0].startswith("~"):
        home = _home()
        if not home:
            print("cd: HOME not set", file=out.stderr)
            return
        rest = args[0][1:]
        target = os.path.normpath(f"{home}/{rest}" if rest else home)
    else:
        target = args[0]

    try:
        os.chdir(target)
    except FileNotFoundError:
        print(f"cd: {target}: No such file or directory", file=out.stderr)
        return
    except OSError as exc:
        print(f"cd: {target}: {exc.strerror or exc}", file=out.stderr)
        return
    state.last_dir = current


def _history_append(state: ShellState, path: str, out: Output) -> None:
    try:
        with open(path, "a", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in state.history[state.history_append_index:])
    except OSError as exc:
        print("history: cannot append to file:", exc, file=out.stderr)
        return
    state.history_append_index = len(state.history)


def _history_read(state: ShellState, path: str, out: Output) -> None:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            data = handle.read()
    except OSError as exc:
        print("history: cannot read file:", exc, file=out.stderr)
        return
    state.history.extend(line for line in data.split("\n") if line.strip())


def _history_write(state: ShellState, path: str, out: Output) -> None:
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(f"{entry}\n" for entry in state.history)
    except OSError as exc:
        print("history: cannot write file:", exc, file=out.stderr)


_HISTORY_FILE_ACTIONS = {"-a": _history_append, "-r": _history_read, "-w": _history_write}


def cmd_history(args: list[str], out: Output, state: ShellState) -> None:
    """List the history, or append, read or write it with ``-a``, ``-r``, ``-w``."""
    if not args:
        for number, entry in enumerate(state.history, start=1):
            print(f"    {number}  {entry}", file=out.stdout)
        return

    if len(args) == 2 and args[0] in _HISTORY_FILE_ACTIONS:
        _HISTORY_FILE_ACTIONS[args[0]](state, args[1], out)
        return

    total = len(state.history)
    count = total
    if len(args) == 1:
        try:
            n = _parse_int(args[0])
        except ValueError:
            n = -1
        if n < 0:
            print("history: invalid number:", args[0], file=out.stderr)
            return
        count = min(n, total)

    start = total - count
    for number, entry in enumerate(state.history[start:], start=start + 1):
        print(f"{number:5d}  {entry}", file=out.stdout)


def builtin_commands() -> dict[str, Builtin]:
    """The builtin commands by name, in the order they are offered."""
    return {
        "exit": cmd_exit,
        "echo": cmd_echo,
        "type": cmd_type,
        "pwd": cmd_pwd,
        "cd": cmd_cd,
        "history": cmd_history,
    }