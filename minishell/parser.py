"""Splitting command lines into words and picking out redirections."""

from __future__ import annotations

from .config import Output, Redirection

_DOUBLE_QUOTE_ESCAPABLE = '"\\$`'

_STDOUT_OPERATORS = {">": False, "1>": False, ">>": True, "1>>": True}
_STDERR_OPERATORS = {"2>": False, "2>>": True}


def separate_command_args(line: str) -> tuple[str, list[str]]:
    """Split ``line`` into a command name and its arguments.

    Single and double quotes group words; a backslash escapes the next
    character outside quotes and only ``" \\ $ `` ` inside double quotes.
    """
    words: list[str] = []
    current: list[str] = []
    in_single = in_double = False
    escaping = False
    skipping_space = False

    for ch in line:
        if skipping_space:
            if ch.isspace():
                continue
            skipping_space = False

        if escaping:
            escaping = False
            if in_single:
                current.append("\\" + ch)
            elif in_double:
                current.append(ch if ch in _DOUBLE_QUOTE_ESCAPABLE else "\\" + ch)
            else:
                current.append(ch)
            continue

        if ch == "'":
            if in_double:
                current.append(ch)
            else:
                in_single = not in_single
        elif ch == '"':
            if in_single:
                current.append(ch)
            else:
                in_double = not in_double
        elif ch == "\\":
            escaping = True
        elif ch in " \t" and not (in_single or in_double):
            if current:
                words.append("".join(current))
                current = []
            skipping_space = True
        else:
            current.append(ch)

    if escaping:
        current.append("\\")
    if current:
        words.append("".join(current))

    if not words:
        return "", []
    return words[0], words[1:]


def parse_redirections(
    args: list[str],
) -> tuple[list[str], Redirection | None, Redirection | None]:
    """Remove redirection operators from ``args``.

    Returns the remaining arguments and the stdout and stderr redirections;
    the last redirection of a stream wins. An operator with no file after
    it is dropped.
    """
    clean: list[str] = []
    stdout_redir: Redirection | None = None
    stderr_redir: Redirection | None = None

    words = iter(args)
    for word in words:
        if word in _STDOUT_OPERATORS:
            target = next(words, None)
            if target is not None:
                stdout_redir = Redirection(target, _STDOUT_OPERATORS[word])
        elif word in _STDERR_OPERATORS:
            target = next(words, None)
            if target is not None:
                stderr_redir = Redirection(target, _STDERR_OPERATORS[word])
        else:
            clean.append(word)
    return clean, stdout_redir, stderr_redir


def _open_target(redirection: Redirection):
    mode = "a" if redirection.append else "w"
    return open(redirection.file, mode, encoding="utf-8")


def setup_output(
    stdout_redir: Redirection | None = None,
    stderr_redir: Redirection | None = None,
) -> Output:
    """Build an :class:`Output`, opening redirection files as needed.

    Raises :class:`OSError` if a file cannot be opened.
    """
    out = Output()
    if stdout_redir is not None:
        out.stdout = _open_target(stdout_redir)
        out.owns_stdout = True
    if stderr_redir is not None:
        try:
            out.stderr = _open_target(stderr_redir)
        except OSError:
            out.close()
            raise
        out.owns_stderr = True
    return out