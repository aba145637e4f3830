"""Finding and running external programs, alone or in pipelines."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
import threading
from collections.abc import Iterable

from .config import Output, ShellState
from .parser import parse_redirections, separate_command_args


def find_executable(command: str, paths: Iterable[str]) -> str | None:
    """Return the first executable regular file named ``command`` in ``paths``."""
    for directory in paths:
        full_path = os.path.join(directory, command)
        try:
            mode = os.stat(full_path).st_mode
        except OSError:
            continue
        if stat.S_ISREG(mode) and mode & 0o111:
            return full_path
    return None


def _fileno(stream) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def execute(command: str, args: list[str], out: Output, state: ShellState) -> bool:
    """Run an external command with its output sent to ``out``.

    Returns False if no executable was found. ``out`` is closed afterwards.
    """
    full_path = find_executable(command, state.paths)
    if full_path is None:
        return False

    stdout_fd = _fileno(out.stdout)
    stderr_fd = _fileno(out.stderr)
    try:
        out.stdout.flush()
        out.stderr.flush()
        result = subprocess.run(
            [command, *args],
            executable=full_path,
            stdout=subprocess.PIPE if stdout_fd is None else stdout_fd,
            stderr=subprocess.PIPE if stderr_fd is None else stderr_fd,
            check=False,
        )
        if result.stdout:
            out.stdout.write(result.stdout.decode(errors="replace"))
        if result.stderr:
            out.stderr.write(result.stderr.decode(errors="replace"))
    except OSError as exc:
        print(f"{command}: {exc}", file=out.stderr)
    finally:
        out.close()
    return True


def run_builtin(name: str, args: list[str], out: Output, state: ShellState) -> bool:
    """Run the builtin ``name`` if there is one; tell whether it ran."""
    command = state.commands.get(name)
    if command is None:
        return False
    command(args, out, state)
    return True


def _parse_stage(part: str) -> list[str]:
    command, args = separate_command_args(part)
    args, _, _ = parse_redirections(args)
    return [command, *args]


def _start_builtin(
    name: str, args: list[str], write_fd: int | None, state: ShellState
) -> threading.Thread:
    if write_fd is None:
        out = Output()
    else:
        stream = os.fdopen(os.dup(write_fd), "w", encoding="utf-8")
        out = Output(stdout=stream, owns_stdout=True)

    def run() -> None:
        try:
            run_builtin(name, args, out, state)
        finally:
            out.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread


def execute_pipeline(line: str, state: ShellState) -> bool:
    """Run the ``|``-separated commands of ``line`` connected by pipes.

    Redirections inside a pipeline are ignored. Returns False if a pipe
    could not be made or a command could not be found or started.
    """
    stages = [_parse_stage(part) for part in (p.strip() for p in line.split("|")) if part]

    pipes: list[tuple[int, int]] = []
    processes: list[subprocess.Popen] = []
    threads: list[threading.Thread] = []
    sys.stdout.flush()
    try:
        try:
            for _ in range(len(stages) - 1):
                pipes.append(os.pipe())
        except OSError as exc:
            print(f"pipe error: {exc}", file=sys.stderr)
            return False

        for index, (name, *args) in enumerate(stages):
            read_fd = pipes[index - 1][0] if index > 0 else None
            write_fd = pipes[index][1] if index < len(pipes) else None

            if state.is_builtin(name):
                threads.append(_start_builtin(name, args, write_fd, state))
                continue

            full_path = find_executable(name, state.paths)
            if full_path is None:
                print(f"{name}: command not found", file=sys.stderr)
                return False
            try:
                processes.append(
                    subprocess.Popen(
                        [name, *args], executable=full_path, stdin=read_fd, stdout=write_fd
                    )
                )
            except OSError as exc:
                print(f"start error: {exc}", file=sys.stderr)
                return False
        return True
    finally:
        for read_fd, write_fd in pipes:
            os.close(read_fd)
            os.close(write_fd)
        for process in processes:
            process.wait()
        for thread in threads:
            thread.join()